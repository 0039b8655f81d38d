"""
Catalog, lending, shipment and configuration endpoints.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

API = "/api/v1"


def _codes(response):
    return [item["code"] for item in response.json()["detail"]]


@pytest.fixture
def product(client: TestClient, distributor_id: str) -> dict:
    category = client.post(
        f"{API}/product-categories", json={"name": "Solar", "code": "SOLAR"}
    ).json()
    response = client.post(
        f"{API}/distributors/{distributor_id}/products",
        json={
            "name": "Solar home kit",
            "category_id": category["id"],
            "specifications": {"panel_watts": 120},
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def contract(client: TestClient, distributor_id: str, product: dict) -> dict:
    lending_type = client.post(
        f"{API}/lending-types", json={"name": "Lease to own", "code": "LEASE"}
    ).json()
    configuration = client.post(
        f"{API}/lending-configurations",
        json={
            "product_id": product["id"],
            "name": "12 months",
            "lending_type_id": lending_type["id"],
            "default_term_months": 12,
        },
    ).json()
    response = client.post(
        f"{API}/lending-contracts",
        json={
            "contract_id": str(uuid4()),
            "party_id": str(uuid4()),
            "distributor_id": distributor_id,
            "product_id": product["id"],
            "lending_configuration_id": configuration["id"],
            "start_date": "2025-02-01",
            "end_date": "2026-02-01",
            "monthly_payment": "25.00",
            "down_payment": "50.00",
            "total_amount": "350.00",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCatalog:
    def test_category_lookups(self, client: TestClient, product: dict) -> None:
        by_code = client.get(f"{API}/product-categories/code/SOLAR")

        assert by_code.status_code == 200
        assert client.get(f"{API}/product-categories/code/NOPE").status_code == 404
        assert client.get(f"{API}/product-categories/active").json()[0]["code"] == "SOLAR"

    def test_products_by_category(
        self, client: TestClient, distributor_id: str, product: dict
    ) -> None:
        response = client.get(
            f"{API}/distributors/{distributor_id}/products/category/{product['category_id']}"
        )

        assert [p["id"] for p in response.json()] == [product["id"]]
        assert response.json()[0]["specifications"] == {"panel_watts": 120}

    def test_catalog_quantity_range(
        self, client: TestClient, distributor_id: str, product: dict
    ) -> None:
        response = client.post(
            f"{API}/distributors/{distributor_id}/product-catalog",
            json={"product_id": product["id"], "min_quantity": 10, "max_quantity": 2},
        )

        assert response.status_code == 400
        assert _codes(response) == ["quantity_range_invalid"]


class TestLending:
    def test_configurations_for_distributor(
        self, client: TestClient, distributor_id: str, contract: dict
    ) -> None:
        response = client.get(f"{API}/distributors/{distributor_id}/lending-configurations")

        assert [c["id"] for c in response.json()] == [contract["lending_configuration_id"]]

    def test_approve_opens_shipment(self, client: TestClient, contract: dict) -> None:
        approver = str(uuid4())

        response = client.post(
            f"{API}/lending-contracts/{contract['id']}/approve", headers={"X-User-Id": approver}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["contract"]["status"] == "APPROVED"
        assert body["contract"]["approved_by"] == approver
        shipment = body["shipment"]
        assert shipment["status"] == "PENDING"
        assert shipment["tracking_number"].startswith("SHIP-")

        tracked = client.get(f"{API}/shipments/tracking/{shipment['tracking_number']}")
        assert tracked.json()["id"] == shipment["id"]
        by_contract = client.get(f"{API}/shipments/lending-contract/{contract['id']}")
        assert [s["id"] for s in by_contract.json()] == [shipment["id"]]

    def test_second_approval_is_409(self, client: TestClient, contract: dict) -> None:
        client.post(f"{API}/lending-contracts/{contract['id']}/approve")

        response = client.post(f"{API}/lending-contracts/{contract['id']}/approve")

        assert response.status_code == 409
        assert _codes(response) == ["lending_contract_status_conflict"]

    def test_shipment_status(self, client: TestClient, contract: dict) -> None:
        shipment = client.post(f"{API}/lending-contracts/{contract['id']}/approve").json()[
            "shipment"
        ]

        response = client.put(
            f"{API}/shipments/{shipment['id']}/status", json={"status": "SHIPPED"}
        )

        assert response.status_code == 200
        assert response.json()["shipping_date"] is not None
        assert [s["id"] for s in client.get(f"{API}/shipments/status/SHIPPED").json()] == [
            shipment["id"]
        ]

    def test_contracts_by_status(self, client: TestClient, contract: dict) -> None:
        drafts = client.get(f"{API}/lending-contracts/status/DRAFT").json()

        assert [c["id"] for c in drafts] == [contract["id"]]


class TestConfigurations:
    def test_value_checked_against_data_type(
        self, client: TestClient, distributor_id: str
    ) -> None:
        data_type = client.post(
            f"{API}/configuration-data-types",
            json={"name": "Integer", "code": "INT", "validation_regex": "\\d+"},
        ).json()
        base = f"{API}/distributors/{distributor_id}/configurations"

        payload = {"config_key": "max_agents", "data_type_id": data_type["id"]}

        ok = client.post(base, json={**payload, "config_value": "10"})
        bad = client.post(base, json={**payload, "config_value": "ten"})

        assert ok.status_code == 201
        assert bad.status_code == 400
        assert _codes(bad) == ["config_value_invalid"]

    def test_duplicate_scope_code_is_409(self, client: TestClient) -> None:
        client.post(f"{API}/configuration-scopes", json={"name": "Global", "code": "GLOBAL"})

        response = client.post(
            f"{API}/configuration-scopes", json={"name": "Global 2", "code": "GLOBAL"}
        )

        assert response.status_code == 409
