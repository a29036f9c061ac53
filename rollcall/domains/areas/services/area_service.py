"""Area directory."""

from __future__ import annotations

from typing import List

from flask import current_app

from rollcall.core.users.models import User
from rollcall.extensions import db


def list_areas() -> List[str]:
    """Configured areas plus any area a user is currently assigned to, sorted."""
    known = set(current_app.config.get("KNOWN_AREAS") or [])
    rows = db.session.query(User.area_id).filter(User.area_id != "").distinct().all()
    known.update(area_id for (area_id,) in rows)
    return sorted(known)
