"""Per-event roll-call status."""

from __future__ import annotations

from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

from rollcall.core.errors import NotFound
from rollcall.core.users.services import register_device
from rollcall.domains.alerts.services import alert_service
from rollcall.domains.dashboard.services import dashboard_service
from rollcall.domains.responses.services import response_service

PUSH = "rollcall.domains.alerts.services.push_service.send_push_to_area"


def _trigger(area_id: str) -> int:
    with patch(PUSH, return_value={"sent": 0, "failed": 0}):
        return alert_service.trigger_alert(area_id).event.id


def test_ok_help_and_pending_members(app, client, make_user, auth_headers):
    u1 = make_user("u1@example.com", name="U1", area_id="area-1")
    u2 = make_user("u2@example.com", name="U2", area_id="area-1")
    u3 = make_user("u3@example.com", name="U3", area_id="area-1")
    make_user("outsider@example.com", name="U4", area_id="area-2")
    event_id = _trigger("area-1")
    response_service.submit_response(u1.id, event_id, "OK")
    response_service.submit_response(u2.id, event_id, "HELP", notes="need medic")

    resp = client.get(f"/api/dashboard/events/{event_id}", headers=auth_headers(u3))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["event"]["id"] == event_id
    assert body["counts"] == {"ok": 1, "help": 1, "pending": 1}
    by_name = {item["user"]["name"]: item for item in body["list"]}
    assert set(by_name) == {"U1", "U2", "U3"}
    assert by_name["U1"]["responseStatus"] == "OK"
    assert by_name["U2"]["responseStatus"] == "HELP"
    assert by_name["U2"]["notes"] == "need medic"
    assert by_name["U3"]["responseStatus"] == "PENDING"
    assert by_name["U3"]["respondedAt"] is None


def test_counts_always_sum_to_member_count(app, make_user):
    members = [make_user(f"m{i}@example.com", area_id="area-2") for i in range(5)]
    event_id = _trigger("area-2")
    for member in members[:3]:
        response_service.submit_response(member.id, event_id, "OK")

    status = dashboard_service.get_event_status(event_id)
    counts = status.counts
    assert counts.ok + counts.help + counts.pending == len(status.list) == 5


def test_member_who_moved_areas_is_not_listed(app, make_user):
    stays = make_user("stays@example.com", area_id="area-1")
    moves = make_user("moves@example.com", area_id="area-1")
    event_id = _trigger("area-1")
    response_service.submit_response(moves.id, event_id, "OK")
    register_device(moves.id, area_id="area-3", device_token="tok")

    status = dashboard_service.get_event_status(event_id)
    assert [item.user.id for item in status.list] == [stays.id]
    assert status.counts.ok == 0
    assert status.counts.pending == 1


def test_unknown_event_is_not_found(app, client, make_user, auth_headers):
    with pytest.raises(NotFound):
        dashboard_service.get_event_status(987654)

    user = make_user("viewer@example.com")
    resp = client.get("/api/dashboard/events/987654", headers=auth_headers(user))
    assert resp.status_code == 404


def test_dashboard_requires_auth(app, client):
    assert client.get("/api/dashboard/events/1").status_code == 401
