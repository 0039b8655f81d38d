"""
Terms and conditions templates, document generation and renewal endpoints.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock

API = "/api/v1"
TEMPLATES = f"{API}/terms-and-conditions-templates"


def _codes(response):
    return [item["code"] for item in response.json()["detail"]]


def _terms(distributor_id: str) -> str:
    return f"{API}/distributors/{distributor_id}/terms-and-conditions"


@pytest.fixture
def template(client: TestClient) -> dict:
    response = client.post(
        TEMPLATES,
        json={
            "name": "Distribution agreement",
            "category": "GENERAL",
            "template_content": "{{distributorName}} agrees to pay {{monthlyFee}} monthly.",
            "variables": '{"monthlyFee": {"type": "number", "required": true}}',
            "version": "1.0",
            "renewal_period_months": 12,
            "auto_renewal": True,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestTemplates:
    def test_duplicate_name_is_409(self, client: TestClient, template: dict) -> None:
        response = client.post(
            TEMPLATES,
            json={
                "name": template["name"],
                "category": "LENDING",
                "template_content": "x",
                "version": "2.0",
            },
        )

        assert response.status_code == 409
        assert _codes(response) == ["template_name_duplicate"]

    def test_lookups(self, client: TestClient, template: dict) -> None:
        by_name = client.get(f"{TEMPLATES}/name/{template['name']}")
        by_category = client.get(f"{TEMPLATES}/category/GENERAL")
        active = client.get(f"{TEMPLATES}/category/GENERAL/active")

        assert by_name.json()["id"] == template["id"]
        assert [t["id"] for t in by_category.json()] == [template["id"]]
        assert [t["id"] for t in active.json()] == [template["id"]]
        assert client.get(f"{TEMPLATES}/name/missing").status_code == 404

    def test_default_flag(self, client: TestClient, template: dict) -> None:
        assert client.get(f"{TEMPLATES}/default").json() == []

        response = client.patch(f"{TEMPLATES}/{template['id']}/set-default")

        assert response.status_code == 200
        assert [t["id"] for t in client.get(f"{TEMPLATES}/default").json()] == [template["id"]]
        assert client.get(f"{TEMPLATES}/default/category/GENERAL").json()["id"] == template["id"]
        assert client.get(f"{TEMPLATES}/default/category/LENDING").status_code == 404

        client.patch(f"{TEMPLATES}/{template['id']}/remove-default")

        assert client.get(f"{TEMPLATES}/default").json() == []

    def test_defaults_listed_per_category(self, client: TestClient, template: dict) -> None:
        lending = client.post(
            TEMPLATES,
            json={
                "name": "Lending agreement",
                "category": "LENDING",
                "template_content": "Lease terms",
                "version": "1.0",
                "is_default": True,
            },
        ).json()
        client.patch(f"{TEMPLATES}/{template['id']}/set-default")

        defaults = client.get(f"{TEMPLATES}/default").json()

        assert sorted(t["id"] for t in defaults) == sorted([template["id"], lending["id"]])
        assert {t["category"] for t in defaults} == {"GENERAL", "LENDING"}

    def test_preview(self, client: TestClient, template: dict) -> None:
        response = client.post(
            f"{TEMPLATES}/{template['id']}/preview", json={"monthlyFee": 50}
        )

        assert response.status_code == 200
        assert response.text == "{{distributorName}} agrees to pay 50 monthly."
        assert response.headers["X-Unresolved-Placeholders"] == "distributorName"

    def test_preview_takes_the_variable_map_as_body(self, client: TestClient) -> None:
        created = client.post(
            TEMPLATES,
            json={
                "name": "Greeting",
                "category": "MARKETING",
                "template_content": "Hello {{clientName}}",
                "version": "1.0",
            },
        ).json()

        response = client.post(f"{TEMPLATES}/{created['id']}/preview", json={"clientName": "Ada"})

        assert response.text == "Hello Ada"
        assert "X-Unresolved-Placeholders" not in response.headers

    def test_preview_without_body(self, client: TestClient, template: dict) -> None:
        response = client.post(f"{TEMPLATES}/{template['id']}/preview")

        assert response.status_code == 200
        assert response.headers["X-Unresolved-Placeholders"] == "distributorName,monthlyFee"

    def test_preview_missing_template(self, client: TestClient) -> None:
        response = client.post(f"{TEMPLATES}/{uuid4()}/preview", json={})

        assert response.status_code == 404


class TestDocuments:
    def test_generate(self, client: TestClient, distributor_id: str, template: dict) -> None:
        response = client.post(
            f"{_terms(distributor_id)}/generate/{template['id']}",
            json={"monthlyFee": 120},
        )

        assert response.status_code == 201
        document = response.json()
        assert document["content"] == "Acme Distribution agrees to pay 120 monthly."
        assert document["status"] == "DRAFT"
        assert document["distributor_id"] == distributor_id
        assert document["template_id"] == template["id"]
        assert client.get(f"{_terms(distributor_id)}/latest").json()["id"] == document["id"]

    def test_generate_with_invalid_variables(
        self, client: TestClient, distributor_id: str, template: dict
    ) -> None:
        response = client.post(
            f"{_terms(distributor_id)}/generate/{template['id']}",
            json={"monthlyFee": "lots"},
        )

        assert response.status_code == 400
        assert _codes(response) == ["variable_type_invalid"]

    def test_generate_for_missing_distributor(self, client: TestClient, template: dict) -> None:
        response = client.post(
            f"{_terms(str(uuid4()))}/generate/{template['id']}",
            json={"monthlyFee": 1},
        )

        assert response.status_code == 404
        assert _codes(response) == ["distributor_not_found"]

    def test_sign_and_status(self, client: TestClient, distributor_id: str, template: dict) -> None:
        base = _terms(distributor_id)
        signer = str(uuid4())
        document = client.post(
            f"{base}/generate/{template['id']}", json={"monthlyFee": 1}
        ).json()

        assert client.get(f"{base}/has-active-signed").json() is False

        signed = client.patch(f"{base}/{document['id']}/sign", headers={"X-User-Id": signer})

        assert signed.status_code == 200
        assert signed.json()["status"] == "SIGNED"
        assert signed.json()["signed_by"] == signer
        assert client.get(f"{base}/has-active-signed").json() is True
        assert [d["id"] for d in client.get(f"{base}/status/SIGNED").json()] == [document["id"]]

        expired = client.patch(f"{base}/{document['id']}/status", json={"status": "EXPIRED"})
        again = client.patch(f"{base}/{document['id']}/sign")

        assert expired.json()["status"] == "EXPIRED"
        assert again.status_code == 409
        assert _codes(again) == ["terms_status_conflict"]

    def test_renewal(self, client: TestClient, distributor_id: str, clock: FixedClock) -> None:
        base = _terms(distributor_id)
        template = client.post(
            TEMPLATES,
            json={
                "name": "Renewable agreement",
                "category": "OPERATIONAL",
                "template_content": "Valid from {{effectiveDate}} for {{distributorName}}.",
                "version": "1.0",
                "renewal_period_months": 12,
                "auto_renewal": True,
            },
        ).json()
        document = client.post(f"{base}/generate/{template['id']}", json={}).json()
        client.patch(f"{base}/{document['id']}/sign")

        assert client.get(f"{base}/{document['id']}/needs-renewal").json() is False
        assert client.get(f"{base}/expiring").json() == []

        clock.set(clock.now() + timedelta(days=350))

        assert client.get(f"{base}/{document['id']}/needs-renewal").json() is True
        assert [d["id"] for d in client.get(f"{base}/expiring").json()] == [document["id"]]

        renewed = client.post(f"{base}/{document['id']}/renew")

        assert renewed.status_code == 201
        assert renewed.json()["id"] != document["id"]
        assert client.get(f"{base}/{document['id']}").json()["is_active"] is False
        assert [d["id"] for d in client.get(f"{base}/active").json()] == [renewed.json()["id"]]

    def test_document_in_other_distributor_is_404(
        self, client: TestClient, distributor_id: str, template: dict
    ) -> None:
        document = client.post(
            f"{_terms(distributor_id)}/generate/{template['id']}",
            json={"monthlyFee": 1},
        ).json()
        other = client.post(f"{API}/distributors", json={"name": "Other"}).json()["id"]

        assert client.get(f"{_terms(other)}/{document['id']}").status_code == 404
        assert client.post(f"{_terms(other)}/{document['id']}/renew").status_code == 404
