"""Area listing API (public)."""

from __future__ import annotations

from flask import Blueprint

from rollcall.core.utils.responses import success
from rollcall.domains.areas.services import area_service

area_api_bp = Blueprint("area_api", __name__)


@area_api_bp.get("")
def list_areas():
    return success({"areas": area_service.list_areas()})
