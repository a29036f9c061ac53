"""Alert trigger flow and alerts API."""

from __future__ import annotations

from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

from rollcall.core.errors import BadRequest
from rollcall.core.events.event_models import EventRecord
from rollcall.domains.alerts.events import ALERTS_EVENT_TRIGGERED
from rollcall.domains.alerts.models import AlertEvent
from rollcall.domains.alerts.services import alert_service

PUSH = "rollcall.domains.alerts.services.push_service.send_push_to_area"


def test_blank_area_is_rejected_and_nothing_persisted(app):
    with patch(PUSH) as push:
        with pytest.raises(BadRequest):
            alert_service.trigger_alert("   ")
    push.assert_not_called()
    assert AlertEvent.query.count() == 0


def test_trigger_persists_event_and_reports_tally(app, make_user):
    user = make_user("cmd@example.com", area_id="area-1")
    with patch(PUSH, return_value={"sent": 3, "failed": 1}) as push:
        result = alert_service.trigger_alert(" area-1 ", triggered_by_user_id=user.id)

    event = AlertEvent.query.one()
    assert event.area_id == "area-1"
    assert event.triggered_by_user_id == user.id
    push.assert_called_once_with("area-1", event.id)
    assert result.event.id == event.id
    assert result.push.sent == 3
    assert result.push.failed == 1

    record = EventRecord.query.filter_by(event_type=ALERTS_EVENT_TRIGGERED).one()
    assert record.payload["event_id"] == event.id
    assert record.payload["sent"] == 3


def test_empty_area_still_creates_event(app):
    with patch("rollcall.domains.alerts.services.push_service.messaging.send_each_for_multicast") as send:
        result = alert_service.trigger_alert("area-9")
    send.assert_not_called()
    assert result.push.sent == 0
    assert result.push.failed == 0
    assert AlertEvent.query.filter_by(area_id="area-9").count() == 1


def test_trigger_api_returns_event_and_push(app, client, make_user, auth_headers):
    user = make_user("api@example.com", area_id="area-1")
    with patch(PUSH, return_value={"sent": 0, "failed": 0}):
        resp = client.post("/api/alerts/trigger", json={"areaId": "area-1"}, headers=auth_headers(user))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["event"]["areaId"] == "area-1"
    assert body["event"]["triggeredByUserId"] == user.id
    assert body["push"] == {"sent": 0, "failed": 0}


def test_trigger_api_rejects_missing_area(app, client, make_user, auth_headers):
    user = make_user("noarea@example.com")
    resp = client.post("/api/alerts/trigger", json={}, headers=auth_headers(user))
    assert resp.status_code == 400
    assert AlertEvent.query.count() == 0


def test_trigger_api_requires_auth(app, client):
    resp = client.post("/api/alerts/trigger", json={"areaId": "area-1"})
    assert resp.status_code == 401


def test_list_events_for_caller_area_newest_first(app, client, make_user, auth_headers):
    user = make_user("lister@example.com", area_id="area-1")
    with patch(PUSH, return_value={"sent": 0, "failed": 0}):
        first = alert_service.trigger_alert("area-1").event.id
        second = alert_service.trigger_alert("area-1").event.id
        alert_service.trigger_alert("area-2")

    resp = client.get("/api/alerts", headers=auth_headers(user))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["areaId"] == "area-1"
    assert [e["id"] for e in body["events"]] == [second, first]


def test_list_events_hides_fully_answered_and_names_trigger(app, client, make_user, auth_headers):
    from rollcall.domains.responses.services import response_service

    caller = make_user("caller@example.com", name="Caller", area_id="area-1")
    mate = make_user("mate2@example.com", name="Mate", area_id="area-1")
    with patch(PUSH, return_value={"sent": 0, "failed": 0}):
        answered = alert_service.trigger_alert("area-1", triggered_by_user_id=mate.id).event.id
        open_event = alert_service.trigger_alert("area-1", triggered_by_user_id=mate.id).event.id
        anonymous = alert_service.trigger_alert("area-1").event.id
    response_service.submit_response(caller.id, answered, "OK")
    response_service.submit_response(mate.id, answered, "HELP")
    response_service.submit_response(caller.id, open_event, "OK")

    resp = client.get("/api/alerts", headers=auth_headers(caller))
    assert resp.status_code == 200
    events = resp.get_json()["events"]
    assert [e["id"] for e in events] == [anonymous, open_event]
    assert events[0]["triggeredBy"] is None
    assert events[1]["triggeredBy"] == {"id": mate.id, "name": "Mate"}


def test_list_events_empty_without_area(app, client, make_user, auth_headers):
    user = make_user("drifter@example.com")
    resp = client.get("/api/alerts", headers=auth_headers(user))
    assert resp.status_code == 200
    assert resp.get_json()["events"] == []
