"""Tests for the event lifecycle.

Covers:
- Event request creation (pending, join code, default radius)
- Approval with the geofence invariant and coordinator lookup
- Rejection, cancellation and finishing, with organizer-only authorization
- Join code lookup and list filters
"""
from attendance.services import event_service
from tests.conftest import (
    EVENT_END,
    EVENT_START,
    create_test_event,
    create_test_user,
    enroll_confirmed,
    generate_keyword,
)

ORGANIZER = {"X-User-Email": "org@example.com"}


def _approve(client, event_id, **fields):
    body = {"approver_email": "admin@example.com"}
    body.update(fields)
    return client.post(f"/api/events/{event_id}/approve", json=body)


class TestEventCreate:
    """Event requests and their initial state."""

    def test_create_event(self, client):
        event = create_test_event(client, title="Python Week", approve=False)
        assert event["title"] == "Python Week"
        assert event["status"] == "pending"
        assert event["validation_radius_meters"] == 100
        assert event["organizer_email"] == "org@example.com"

    def test_join_code_format(self, client):
        code = create_test_event(client, approve=False)["join_code"]
        assert len(code) == 6
        assert code == code.upper()
        assert code.isalnum()

    def test_join_codes_differ(self, client):
        codes = {create_test_event(client, approve=False)["join_code"] for _ in range(5)}
        assert len(codes) == 5

    def test_organizer_email_normalized(self, client):
        event = create_test_event(client, organizer="Org@Example.COM", approve=False)
        assert event["organizer_email"] == "org@example.com"

    def test_join_code_taken_concurrently_is_redrawn(self, client, monkeypatch):
        taken = create_test_event(client, approve=False)["join_code"]
        # The existence check missed a code another request committed in the meantime
        codes = iter([taken, "FRESH1"])
        monkeypatch.setattr(event_service, "_new_join_code", lambda db: next(codes))

        event = create_test_event(client, title="Second", approve=False)
        assert event["join_code"] == "FRESH1"
        assert len(client.get("/api/events/").json()) == 2

    def test_end_before_start_rejected(self, client):
        resp = client.post("/api/events/", json={
            "title": "Backwards",
            "start_date": EVENT_END.isoformat(),
            "end_date": EVENT_START.isoformat(),
            "organizer_email": "org@example.com",
        })
        assert resp.status_code == 422


class TestEventApprove:
    """Approval by a campus administrator."""

    def test_approve_with_geofence(self, client):
        event = create_test_event(client)
        assert event["status"] == "approved"
        assert event["approver_email"] == "admin@example.com"
        assert event["latitude"] == 0.0
        assert event["workload_hours"] == 8

    def test_approve_without_geofence_fails(self, client):
        event = create_test_event(client, approve=False)
        resp = _approve(client, event["event_id"])
        assert resp.status_code == 422
        assert client.get(f"/api/events/{event['event_id']}").json()["status"] == "pending"

    def test_approve_with_waiver(self, client):
        event = create_test_event(client, approve=False)
        resp = _approve(client, event["event_id"], location_validation_waived=True)
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"

    def test_approve_remote_event(self, client):
        event = create_test_event(client, approve=False)
        resp = _approve(client, event["event_id"], remote_attendance_allowed=True)
        assert resp.status_code == 200

    def test_approve_twice_conflicts(self, client):
        event = create_test_event(client)
        resp = _approve(client, event["event_id"], location_validation_waived=True)
        assert resp.status_code == 409

    def test_unknown_coordinator(self, client):
        event = create_test_event(client, approve=False)
        resp = _approve(client, event["event_id"], location_validation_waived=True,
                        coordinator_id="missing")
        assert resp.status_code == 404

    def test_coordinator_attached(self, client):
        coordinator = client.post("/api/coordinators/", json={"name": "Dr. Lima"}).json()
        event = create_test_event(client, coordinator_id=coordinator["coordinator_id"])
        assert event["coordinator_id"] == coordinator["coordinator_id"]

    def test_unknown_event(self, client):
        resp = _approve(client, "nonexistent", location_validation_waived=True)
        assert resp.status_code == 404


class TestEventTransitions:
    """Rejection, cancellation and finishing."""

    def test_reject(self, client):
        event = create_test_event(client, approve=False)
        resp = client.post(f"/api/events/{event['event_id']}/reject",
                           json={"approver_email": "admin@example.com"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "rejected"

    def test_reject_approved_event_conflicts(self, client):
        event = create_test_event(client)
        resp = client.post(f"/api/events/{event['event_id']}/reject",
                           json={"approver_email": "admin@example.com"})
        assert resp.status_code == 409

    def test_cancel_by_organizer(self, client):
        event = create_test_event(client)
        resp = client.post(f"/api/events/{event['event_id']}/cancel", headers=ORGANIZER)
        assert resp.status_code == 200
        assert resp.json()["status"] == "cancelled"

    def test_cancel_by_someone_else(self, client):
        event = create_test_event(client)
        resp = client.post(f"/api/events/{event['event_id']}/cancel",
                           headers={"X-User-Email": "mallory@example.com"})
        assert resp.status_code == 403

    def test_cancel_without_identity(self, client):
        event = create_test_event(client)
        resp = client.post(f"/api/events/{event['event_id']}/cancel")
        assert resp.status_code == 403

    def test_cancel_twice(self, client):
        event = create_test_event(client)
        client.post(f"/api/events/{event['event_id']}/cancel", headers=ORGANIZER)
        resp = client.post(f"/api/events/{event['event_id']}/cancel", headers=ORGANIZER)
        assert resp.status_code == 400

    def test_finish_pending_event_conflicts(self, client):
        event = create_test_event(client, approve=False)
        resp = client.post(f"/api/events/{event['event_id']}/finish", headers=ORGANIZER)
        assert resp.status_code == 409

    def test_finished_event_stops_check_ins(self, client):
        event = create_test_event(client)
        create_test_user(client)
        enroll_confirmed(client, event["event_id"], "alice@example.com")
        keyword = generate_keyword(client, event["event_id"], EVENT_START)

        resp = client.post(f"/api/events/{event['event_id']}/finish", headers=ORGANIZER)
        assert resp.status_code == 200
        assert resp.json()["status"] == "finished"

        resp = client.post(
            "/api/checkin/",
            json={"join_code": event["join_code"], "keyword": keyword, "latitude": 0.0, "longitude": 0.0},
            headers={"X-User-Email": "alice@example.com"},
        )
        assert resp.status_code == 403
        assert resp.json()["detail"]["reason"] == "EVENT_NOT_ACCEPTING_CHECKINS"


class TestEventLookup:

    def test_by_code_case_insensitive(self, client):
        event = create_test_event(client)
        resp = client.get(f"/api/events/by-code/{event['join_code'].lower()}")
        assert resp.status_code == 200
        assert resp.json()["event_id"] == event["event_id"]

    def test_by_unknown_code(self, client):
        assert client.get("/api/events/by-code/ZZZZZZ").status_code == 404

    def test_list_filters(self, client):
        approved = create_test_event(client, title="Approved")
        create_test_event(client, title="Pending", approve=False)
        create_test_event(client, title="Elsewhere", organizer="other@example.com", approve=False)

        resp = client.get("/api/events/", params={"status": "approved"})
        assert [e["event_id"] for e in resp.json()] == [approved["event_id"]]

        resp = client.get("/api/events/", params={"organizer_email": "OTHER@example.com"})
        assert [e["title"] for e in resp.json()] == ["Elsewhere"]

        assert len(client.get("/api/events/").json()) == 3
