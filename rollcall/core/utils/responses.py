"""JSON envelope helpers shared by every controller."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from flask import jsonify

from rollcall.core.errors import AppError
from rollcall.core.utils.schemas import CamelModel


def success(payload: Optional[Union[CamelModel, Mapping[str, Any]]] = None, status: int = 200):
    """``{"success": true, ...payload}``"""
    body: dict[str, Any] = {"success": True}
    if isinstance(payload, CamelModel):
        body.update(payload.to_wire())
    elif payload:
        body.update(payload)
    return jsonify(body), status


def failure(error: AppError):
    """``{"success": false, "error": {"message", "status", ...extra}}``"""
    return jsonify({"success": False, "error": error.to_dict()}), error.status
