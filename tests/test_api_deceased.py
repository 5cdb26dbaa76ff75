"""HTTP tests for deceased record endpoints."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.factories import deceased_payload

API = "/api/v1"


def setup_chamber(client, name="A", capacity=2):
    assert client.post(f"{API}/chambers", json={"name": name, "capacity": capacity}).status_code == 201


def chamber(client, name="A"):
    return client.get(f"{API}/chambers/lookup", params={"chamber_name": name}).json()


class TestCreateDeceased:
    def test_direct_assignment(self, client):
        setup_chamber(client)
        resp = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A"))
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "IN_FACILITY"
        assert body["chamber_unit_name"] == "1A"
        assert body["chamber"]["name"] == "A"
        assert body["chamber"]["current_occupancy"] == 1

    def test_auto_assignment(self, client):
        setup_chamber(client, "D", 1)
        resp = client.post(f"{API}/deceased", json=deceased_payload())
        assert resp.status_code == 201
        assert resp.json()["chamber_unit_name"] == "1D"

    def test_no_chamber_available(self, client):
        resp = client.post(f"{API}/deceased", json=deceased_payload())
        assert resp.status_code == 400
        assert resp.json()["code"] == "NO_AVAILABLE_CHAMBER"

    def test_unassigned(self, client):
        resp = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False))
        assert resp.status_code == 201
        assert resp.json()["chamber"] is None

    def test_full_chamber(self, client):
        setup_chamber(client, "A", 1)
        client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A"))

        resp = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A"))

        assert resp.status_code == 400
        assert resp.json()["code"] == "CHAMBER_FULL"
        assert chamber(client)["current_occupancy"] == 1

    def test_maintenance_chamber(self, client):
        setup_chamber(client)
        client.put(f"{API}/chambers", params={"chamber_name": "A"}, json={"status": "MAINTENANCE"})

        resp = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A"))

        assert resp.status_code == 400
        assert "maintenance" in resp.json()["detail"]

    def test_missing_chamber(self, client):
        resp = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="Z"))
        assert resp.status_code == 404

    def test_missing_required_field(self, client):
        payload = deceased_payload()
        del payload["date_of_death"]
        resp = client.post(f"{API}/deceased", json=payload)
        assert resp.status_code == 400
        assert any("date_of_death" in e for e in resp.json()["errors"])


class TestStatusUpdate:
    def test_release_frees_unit(self, client):
        setup_chamber(client, "A", 2)
        first = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A")).json()
        client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A"))
        assert chamber(client)["status"] == "OCCUPIED"

        resp = client.put(f"{API}/deceased", params={"id": first["id"]}, json={"status": "RELEASED"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "RELEASED"
        assert body["chamber"] is None
        assert body["chamber_unit_name"] is None
        after = chamber(client)
        assert after["current_occupancy"] == 1
        assert after["status"] == "AVAILABLE"
        assert after["available_units"] == ["1A"]

    def test_invalid_status(self, client):
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()
        resp = client.put(f"{API}/deceased", params={"id": record["id"]}, json={"status": "BURIED"})
        assert resp.status_code == 400

    def test_no_return_from_terminal(self, client):
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()
        client.put(f"{API}/deceased", params={"id": record["id"]}, json={"status": "PROCESSED"})

        resp = client.put(f"{API}/deceased", params={"id": record["id"]}, json={"status": "IN_FACILITY"})

        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_STATUS_TRANSITION"

    def test_missing_record(self, client):
        resp = client.put(f"{API}/deceased", params={"id": 999}, json={"status": "RELEASED"})
        assert resp.status_code == 404


class TestOtherDeceasedEndpoints:
    def test_get_and_list(self, client):
        setup_chamber(client, "A", 3)
        created = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A", last_name="Smith")).json()
        client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False))

        one = client.get(f"{API}/deceased", params={"id": created["id"]})
        assert one.status_code == 200
        assert one.json()["last_name"] == "Smith"

        assert len(client.get(f"{API}/deceased/all").json()) == 2
        in_a = client.get(f"{API}/deceased/all", params={"chamber_name": "A"}).json()
        assert [r["id"] for r in in_a] == [created["id"]]

    def test_get_missing(self, client):
        assert client.get(f"{API}/deceased", params={"id": 42}).status_code == 404

    def test_missing_id_param(self, client):
        assert client.get(f"{API}/deceased").status_code == 400

    def test_edit_details(self, client):
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()
        resp = client.patch(f"{API}/deceased", params={"id": record["id"]},
                            json={"cause_of_death": "Cardiac arrest", "personal_belongings": "Watch"})
        assert resp.status_code == 200
        assert resp.json()["cause_of_death"] == "Cardiac arrest"
        assert resp.json()["first_name"] == "John"

    def test_edit_cannot_null_required_fields(self, client):
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()

        resp = client.patch(f"{API}/deceased", params={"id": record["id"]}, json={"first_name": None})
        assert resp.status_code == 400
        assert any("first_name" in e for e in resp.json()["errors"])

        resp = client.patch(f"{API}/deceased", params={"id": record["id"]}, json={"date_of_death": None})
        assert resp.status_code == 400

        # Optional columns can still be cleared
        resp = client.patch(f"{API}/deceased", params={"id": record["id"]}, json={"cause_of_death": None})
        assert resp.status_code == 200
        assert resp.json()["cause_of_death"] is None
        assert resp.json()["first_name"] == "John"

    def test_assign_later(self, client):
        setup_chamber(client, "B", 2)
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()

        resp = client.post(f"{API}/deceased/assign", params={"id": record["id"]}, json={"chamber_name": "B"})

        assert resp.status_code == 200
        assert resp.json()["chamber_unit_name"] == "1B"
        assert chamber(client, "B")["current_occupancy"] == 1

    def test_assign_without_body_picks_any_chamber(self, client):
        setup_chamber(client, "B", 2)
        record = client.post(f"{API}/deceased", json=deceased_payload(auto_assign=False)).json()

        resp = client.post(f"{API}/deceased/assign", params={"id": record["id"]})

        assert resp.json()["chamber_unit_name"] == "1B"

    def test_delete_decrements_occupancy(self, client):
        setup_chamber(client, "A", 1)
        record = client.post(f"{API}/deceased", json=deceased_payload(chamber_name="A")).json()

        resp = client.delete(f"{API}/deceased", params={"id": record["id"]})

        assert resp.status_code == 200
        assert chamber(client)["current_occupancy"] == 0
        assert chamber(client)["status"] == "AVAILABLE"
