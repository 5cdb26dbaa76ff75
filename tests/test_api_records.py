"""HTTP tests for next of kin, services, releases, staff, statistics and health."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient
from mortuary.config import Settings
from mortuary.main import create_app
from tests.factories import deceased_payload

API = "/api/v1"


def new_record(client, **overrides):
    resp = client.post(f"{API}/deceased", json=deceased_payload(**overrides))
    assert resp.status_code == 201
    return resp.json()


def kin_payload(deceased_id, **overrides):
    payload = {
        "deceased_id": deceased_id,
        "first_name": "Jane",
        "last_name": "Doe",
        "relationship": "Spouse",
        "phone_number": "+1 555 0100",
        "email": "jane@example.com",
    }
    payload.update(overrides)
    return payload


class TestNextOfKin:
    def test_crud(self, client):
        record = new_record(client, auto_assign=False)

        created = client.post(f"{API}/next-of-kin", json=kin_payload(record["id"]))
        assert created.status_code == 201
        kin_id = created.json()["id"]

        listed = client.get(f"{API}/next-of-kin", params={"deceased_id": record["id"]}).json()
        assert [k["id"] for k in listed] == [kin_id]
        assert client.get(f"{API}/deceased", params={"id": record["id"]}).json()["next_of_kin"][0]["first_name"] == "Jane"

        updated = client.put(f"{API}/next-of-kin", params={"id": kin_id}, json={"phone_number": "+1 555 0199"})
        assert updated.json()["phone_number"] == "+1 555 0199"
        assert updated.json()["relationship"] == "Spouse"

        assert client.delete(f"{API}/next-of-kin", params={"id": kin_id}).status_code == 200
        assert client.get(f"{API}/next-of-kin", params={"deceased_id": record["id"]}).json() == []

    def test_unknown_deceased(self, client):
        assert client.post(f"{API}/next-of-kin", json=kin_payload(77)).status_code == 404

    def test_bad_email(self, client):
        record = new_record(client, auto_assign=False)
        resp = client.post(f"{API}/next-of-kin", json=kin_payload(record["id"], email="not-an-email"))
        assert resp.status_code == 400

    def test_update_cannot_null_phone(self, client):
        record = new_record(client, auto_assign=False)
        kin_id = client.post(f"{API}/next-of-kin", json=kin_payload(record["id"])).json()["id"]

        assert client.put(f"{API}/next-of-kin", params={"id": kin_id}, json={"phone_number": None}).status_code == 400

        cleared = client.put(f"{API}/next-of-kin", params={"id": kin_id}, json={"email": None})
        assert cleared.status_code == 200
        assert cleared.json()["email"] is None
        assert cleared.json()["phone_number"] == "+1 555 0100"

    def test_removed_with_deceased(self, client):
        record = new_record(client, auto_assign=False)
        client.post(f"{API}/next-of-kin", json=kin_payload(record["id"]))

        client.delete(f"{API}/deceased", params={"id": record["id"]})

        assert client.get(f"{API}/next-of-kin", params={"deceased_id": record["id"]}).json() == []


class TestServices:
    def test_lifecycle_and_stats(self, client):
        record = new_record(client, auto_assign=False)
        created = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "Embalming", "type": "CARE", "cost": "250.00",
        })
        assert created.status_code == 201
        service = created.json()
        assert service["status"] == "PENDING"
        assert service["completed_at"] is None

        done = client.put(f"{API}/services", params={"id": service["id"]}, json={"status": "COMPLETED"}).json()
        assert done["status"] == "COMPLETED"
        assert done["completed_at"] is not None

        client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "Transport", "type": "LOGISTICS", "cost": "100",
        })
        stats = client.get(f"{API}/services/stats").json()
        by_key = {(row["type"], row["status"]): row for row in stats}
        assert by_key[("CARE", "COMPLETED")]["count"] == 1
        assert float(by_key[("CARE", "COMPLETED")]["total_cost"]) == 250.0
        assert by_key[("LOGISTICS", "PENDING")]["count"] == 1

        assert len(client.get(f"{API}/services", params={"deceased_id": record["id"]}).json()) == 2

    def test_reopening_clears_completion(self, client):
        record = new_record(client, auto_assign=False)
        service = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "Viewing", "type": "RITUAL",
        }).json()
        client.put(f"{API}/services", params={"id": service["id"]}, json={"status": "COMPLETED"})

        reopened = client.put(f"{API}/services", params={"id": service["id"]}, json={"status": "IN_PROGRESS"}).json()

        assert reopened["completed_at"] is None

    def test_invalid_type_and_status(self, client):
        record = new_record(client, auto_assign=False)
        bad_type = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "X", "type": "PARTY",
        })
        assert bad_type.status_code == 400

        service = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "X", "type": "OTHER",
        }).json()
        bad_status = client.put(f"{API}/services", params={"id": service["id"]}, json={"status": "DONE"})
        assert bad_status.status_code == 400

    def test_required_fields_cannot_be_nulled(self, client):
        record = new_record(client, auto_assign=False)
        service = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "Viewing", "type": "RITUAL",
        }).json()

        for field in ("name", "type", "cost", "status"):
            resp = client.put(f"{API}/services", params={"id": service["id"]}, json={field: None})
            assert resp.status_code == 400, field
            assert any(field in e for e in resp.json()["errors"])

        assert client.get(f"{API}/services", params={"deceased_id": record["id"]}).json()[0]["name"] == "Viewing"

    def test_delete(self, client):
        record = new_record(client, auto_assign=False)
        service = client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "X", "type": "OTHER",
        }).json()
        assert client.delete(f"{API}/services", params={"id": service["id"]}).status_code == 200
        assert client.delete(f"{API}/services", params={"id": service["id"]}).status_code == 404


class TestReleases:
    def release_payload(self, deceased_id, **overrides):
        payload = {
            "deceased_id": deceased_id,
            "released_to": "Jane Doe",
            "relationship": "Spouse",
            "release_date": "2024-03-05",
            "documents": "Death certificate",
        }
        payload.update(overrides)
        return payload

    def test_release_frees_chamber(self, client):
        client.post(f"{API}/chambers", json={"name": "A", "capacity": 1})
        record = new_record(client, chamber_name="A")

        resp = client.post(f"{API}/releases", json=self.release_payload(record["id"]))

        assert resp.status_code == 201
        after = client.get(f"{API}/deceased", params={"id": record["id"]}).json()
        assert after["status"] == "RELEASED"
        assert after["chamber"] is None
        chamber = client.get(f"{API}/chambers/lookup", params={"chamber_name": "A"}).json()
        assert chamber["current_occupancy"] == 0
        assert chamber["status"] == "AVAILABLE"

    def test_double_release_rejected(self, client):
        record = new_record(client, auto_assign=False)
        client.post(f"{API}/releases", json=self.release_payload(record["id"]))

        resp = client.post(f"{API}/releases", json=self.release_payload(record["id"]))

        assert resp.status_code == 400
        assert resp.json()["code"] == "ALREADY_RELEASED"

    def test_unknown_deceased(self, client):
        assert client.post(f"{API}/releases", json=self.release_payload(5)).status_code == 404

    def test_get_update_and_stats(self, client):
        first = new_record(client, auto_assign=False)
        second = new_record(client, auto_assign=False)
        release = client.post(f"{API}/releases", json=self.release_payload(first["id"])).json()
        client.post(f"{API}/releases", json=self.release_payload(second["id"], release_date="2024-04-01"))

        fetched = client.get(f"{API}/releases", params={"deceased_id": first["id"]})
        assert fetched.json()["id"] == release["id"]

        updated = client.put(f"{API}/releases", params={"id": release["id"]}, json={"remarks": "Collected"})
        assert updated.json()["remarks"] == "Collected"

        stats = client.get(f"{API}/releases/stats").json()
        assert stats["total_releases"] == 2
        assert stats["releases_by_month"] == [
            {"month": "2024-04", "count": 1},
            {"month": "2024-03", "count": 1},
        ]

    def test_update_cannot_null_recipient(self, client):
        record = new_record(client, auto_assign=False)
        release = client.post(f"{API}/releases", json=self.release_payload(record["id"])).json()

        resp = client.put(f"{API}/releases", params={"id": release["id"]}, json={"released_to": None})

        assert resp.status_code == 400
        assert client.get(f"{API}/releases", params={"deceased_id": record["id"]}).json()["released_to"] == release["released_to"]

    def test_missing_release(self, client):
        record = new_record(client, auto_assign=False)
        assert client.get(f"{API}/releases", params={"deceased_id": record["id"]}).status_code == 404


class TestStaff:
    def test_crud(self, client):
        created = client.post(f"{API}/staff", json={"name": "Ada", "email": "Ada@Example.com", "role": "ADMIN"})
        assert created.status_code == 201
        staff = created.json()
        assert staff["email"] == "ada@example.com"
        assert staff["status"] == "ACTIVE"

        record = new_record(client, auto_assign=False, handled_by_id=staff["id"])
        assert record["handled_by_id"] == staff["id"]

        updated = client.put(f"{API}/staff", params={"id": staff["id"]}, json={"status": "INACTIVE"})
        assert updated.json()["status"] == "INACTIVE"
        assert [s["id"] for s in client.get(f"{API}/staff/all", params={"role": "ADMIN"}).json()] == [staff["id"]]

        assert client.delete(f"{API}/staff", params={"id": staff["id"]}).status_code == 200
        assert client.get(f"{API}/deceased", params={"id": record["id"]}).json()["handled_by_id"] is None

    def test_duplicate_email(self, client):
        client.post(f"{API}/staff", json={"name": "Ada", "email": "ada@example.com"})
        resp = client.post(f"{API}/staff", json={"name": "Ada 2", "email": "ADA@example.com"})
        assert resp.status_code == 400

    def test_missing(self, client):
        assert client.get(f"{API}/staff", params={"id": 3}).status_code == 404

    def test_update_cannot_null_name_or_role(self, client):
        staff = client.post(f"{API}/staff", json={"name": "Ada", "email": "ada@example.com"}).json()
        assert client.put(f"{API}/staff", params={"id": staff["id"]}, json={"name": None}).status_code == 400
        assert client.put(f"{API}/staff", params={"id": staff["id"]}, json={"role": None}).status_code == 400
        assert client.put(f"{API}/staff", params={"id": staff["id"]}, json={"phone": None}).status_code == 200


class TestOverviewAndHealth:
    def test_overview(self, client):
        client.post(f"{API}/chambers", json={"name": "A", "capacity": 2})
        record = new_record(client, chamber_name="A")
        client.post(f"{API}/services", json={
            "deceased_id": record["id"], "name": "Embalming", "type": "CARE", "cost": "200",
        })

        overview = client.get(f"{API}/stats/overview").json()

        assert overview["chambers"]["total_chambers"] == 1
        assert overview["chambers"]["occupancy_rate"] == 50.0
        assert overview["deceased"]["IN_FACILITY"] == 1
        assert overview["services"]["total_services"] == 1
        assert overview["services"]["total_revenue"] == 200.0

    def test_health(self, client):
        body = client.get(f"{API}/health").json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"


class TestApiKey:
    def test_key_required_when_configured(self, database):
        app = create_app(settings=Settings(API_KEY="secret"), database=database)
        with TestClient(app) as c:
            assert c.get(f"{API}/chambers").status_code == 401
            assert c.get(f"{API}/chambers", headers={"X-API-Key": "secret"}).status_code == 200
            assert c.get(f"{API}/chambers", params={"api_key": "secret"}).status_code == 200
            assert c.get(f"{API}/health").status_code == 200
