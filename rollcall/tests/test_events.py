import pytest

from rollcall.core.events.event_bus import EventBus
from rollcall.core.events.event_models import EventRecord
from rollcall.core.events.event_service import log_event
from rollcall.domains.responses.events import RESPONSES_RESPONSE_SUBMITTED


@pytest.mark.unit
def test_subscribe_is_idempotent_and_unsubscribe_stops_delivery():
    bus = EventBus()
    seen = []

    def handler(event):
        seen.append(event.event_type)

    bus.subscribe("x.happened", handler)
    bus.subscribe("x.happened", handler)
    bus.publish(EventRecord(event_type="x.happened", payload={}))
    assert seen == ["x.happened"]

    bus.unsubscribe("x.happened", handler)
    bus.publish(EventRecord(event_type="x.happened", payload={}))
    assert seen == ["x.happened"]


@pytest.mark.integration
def test_log_event_persists_and_publishes(app, make_user):
    from rollcall.core.events.event_bus import event_bus

    user = make_user("evt@example.com")
    received = []
    event_bus.subscribe(RESPONSES_RESPONSE_SUBMITTED, received.append)
    try:
        record = log_event(RESPONSES_RESPONSE_SUBMITTED, {"status": "OK"}, user_id=user.id)
    finally:
        event_bus.unsubscribe(RESPONSES_RESPONSE_SUBMITTED, received.append)

    assert record.id is not None
    assert received == [record]
    assert EventRecord.query.filter_by(user_id=user.id).count() == 1
