import pytest

pytestmark = pytest.mark.integration

from rollcall.core.auth.auth_service import authenticate_user
from rollcall.core.users.models import User
from rollcall.domains.alerts.models import AlertEvent
from rollcall.domains.dashboard.services import dashboard_service
from rollcall.scripts.seed_demo import DEMO_PASSWORD


def test_seed_demo_creates_roster_and_events(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-demo", "--per-area", "3", "--with-events"])

    assert result.exit_code == 0, result.output
    assert User.query.count() == 9
    assert authenticate_user("area-1-member1@example.com", DEMO_PASSWORD) is not None

    event = AlertEvent.query.filter_by(area_id="area-1").one()
    counts = dashboard_service.get_event_status(event.id).counts
    assert counts.pending == 1
    assert counts.ok + counts.help == 2


def test_seed_demo_skips_when_users_exist(app, make_user):
    make_user("existing@example.com")
    result = app.test_cli_runner().invoke(args=["seed-demo"])
    assert "skipping" in result.output
    assert User.query.count() == 1
