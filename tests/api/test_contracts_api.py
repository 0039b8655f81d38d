"""
Distributor contract and simulation endpoints.
"""

from uuid import uuid4

from fastapi.testclient import TestClient

API = "/api/v1"


def _codes(response):
    return [item["code"] for item in response.json()["detail"]]


class TestContracts:
    def test_contract_number_unique_per_distributor(
        self, client: TestClient, distributor_id: str
    ) -> None:
        base = f"{API}/distributors/{distributor_id}/contracts"
        other = client.post(f"{API}/distributors", json={"name": "Other"}).json()["id"]

        first = client.post(base, json={"contract_number": "C-1", "title": "Supply"})
        duplicate = client.post(base, json={"contract_number": "C-1"})
        elsewhere = client.post(
            f"{API}/distributors/{other}/contracts", json={"contract_number": "C-1"}
        )

        assert first.status_code == 201
        assert duplicate.status_code == 409
        assert elsewhere.status_code == 201

    def test_end_before_start_is_400(self, client: TestClient, distributor_id: str) -> None:
        response = client.post(
            f"{API}/distributors/{distributor_id}/contracts",
            json={"start_date": "2025-06-01", "end_date": "2025-01-01"},
        )

        assert response.status_code == 400
        assert _codes(response) == ["contract_period_invalid"]

    def test_contract_value_is_kept_exact(self, client: TestClient, distributor_id: str) -> None:
        base = f"{API}/distributors/{distributor_id}/contracts"
        created = client.post(base, json={"contract_value": "1234.50", "currency_code": "EUR"})

        fetched = client.get(f"{base}/{created.json()['id']}").json()

        assert fetched["contract_value"] == "1234.50"


class TestSimulations:
    def test_status_and_lookups(self, client: TestClient, distributor_id: str) -> None:
        base = f"{API}/distributors/{distributor_id}/simulations"
        application = str(uuid4())
        simulation = client.post(base, json={"application_id": application}).json()

        assert simulation["simulation_status"] == "PENDING"

        updated = client.patch(f"{base}/{simulation['id']}/status", json={"status": "APPROVED"})

        assert updated.status_code == 200
        assert updated.json()["simulation_status"] == "APPROVED"
        assert [s["id"] for s in client.get(f"{base}/status/APPROVED").json()] == [
            simulation["id"]
        ]
        assert [
            s["id"] for s in client.get(f"{API}/simulations/application/{application}").json()
        ] == [simulation["id"]]
        assert [s["id"] for s in client.get(f"{API}/simulations/status/APPROVED").json()] == [
            simulation["id"]
        ]

    def test_activate_and_deactivate(self, client: TestClient, distributor_id: str) -> None:
        base = f"{API}/distributors/{distributor_id}/simulations"
        simulation = client.post(base, json={"application_id": str(uuid4())}).json()

        deactivated = client.patch(f"{base}/{simulation['id']}/deactivate")

        assert deactivated.json()["is_active"] is False
        assert client.get(f"{base}/active").json() == []
        assert len(client.get(base).json()) == 1

        client.patch(f"{base}/{simulation['id']}/activate")

        assert [s["id"] for s in client.get(f"{base}/active").json()] == [simulation["id"]]

    def test_status_in_other_distributor_is_404(
        self, client: TestClient, distributor_id: str
    ) -> None:
        simulation = client.post(
            f"{API}/distributors/{distributor_id}/simulations",
            json={"application_id": str(uuid4())},
        ).json()
        other = client.post(f"{API}/distributors", json={"name": "Other"}).json()["id"]

        response = client.patch(
            f"{API}/distributors/{other}/simulations/{simulation['id']}/status",
            json={"status": "APPROVED"},
        )

        assert response.status_code == 404
