"""Input validation helpers."""

from __future__ import annotations

from typing import Type, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from rollcall.core.errors import BadRequest

M = TypeVar("M", bound=BaseModel)


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
    return errors


def parse_body(schema: Type[M]) -> M:
    """Validate the JSON body against ``schema`` or raise ``BadRequest``."""
    payload = request.get_json(silent=True) or {}
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise BadRequest("Validation error", issues=jsonable_errors(exc)) from exc
