"""CLI command for seeding a demo roster.

Usage:
    flask seed-demo                    # 4 users per area, skip if any user exists
    flask seed-demo --per-area 6
    flask seed-demo --with-events      # also trigger one event per area with sample answers
"""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

DEMO_PASSWORD = "Passw0rd!"


@click.command("seed-demo")
@click.option("--per-area", type=int, default=4, show_default=True, help="Users created per area")
@click.option("--with-events", is_flag=True, help="Create one alert event per area with sample responses")
@with_appcontext
def seed_demo_command(per_area: int, with_events: bool):
    """Seed demo users (password Passw0rd!) when the user table is empty."""
    from rollcall.core.auth.password import hash_password
    from rollcall.core.users.models import User
    from rollcall.domains.alerts.models import AlertEvent
    from rollcall.domains.responses.models import RESPONSE_STATUSES, Response
    from rollcall.extensions import db

    if User.query.count() > 0:
        click.echo("Users already exist; skipping seed.")
        return

    areas = current_app.config.get("KNOWN_AREAS") or []
    password_hash = hash_password(DEMO_PASSWORD)
    users_by_area: dict[str, list[User]] = {}
    for area_id in areas:
        for index in range(1, per_area + 1):
            user = User(
                email=f"{area_id}-member{index}@example.com",
                name=f"{area_id.title()} Member {index}",
                area_id=area_id,
                device_token="",
                password_hash=password_hash,
            )
            db.session.add(user)
            users_by_area.setdefault(area_id, []).append(user)
    db.session.flush()
    click.echo(f"  ✓ Users: {sum(len(users) for users in users_by_area.values())} across {len(areas)} areas")

    if with_events:
        responses = 0
        for area_id, members in users_by_area.items():
            event = AlertEvent(area_id=area_id, triggered_by_user_id=members[0].id if members else None)
            db.session.add(event)
            db.session.flush()
            # Leave the last member silent so every dashboard shows a pending entry.
            for position, member in enumerate(members[:-1]):
                status = RESPONSE_STATUSES[position % len(RESPONSE_STATUSES)]
                db.session.add(Response(user_id=member.id, event_id=event.id, status=status))
                responses += 1
        click.echo(f"  ✓ Events: {len(users_by_area)}, Responses: {responses}")

    db.session.commit()


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(seed_demo_command)
