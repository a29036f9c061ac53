"""Failure envelope and request correlation."""

from __future__ import annotations

import pytest

from rollcall.core.errors import AppError, BadRequest, Conflict, NotFound, ServerError, Unauthorized


@pytest.mark.unit
@pytest.mark.parametrize(
    "error_cls, status, message",
    [
        (AppError, 500, "Server error"),
        (BadRequest, 400, "Bad request"),
        (Unauthorized, 401, "Unauthorized"),
        (NotFound, 404, "Not found"),
        (Conflict, 400, "Duplicate entry"),
        (ServerError, 500, "Server error"),
    ],
)
def test_error_defaults(error_cls, status, message):
    error = error_cls()
    assert error.to_dict() == {"message": message, "status": status}


@pytest.mark.unit
def test_error_extra_fields_are_merged():
    error = BadRequest("Validation error", issues=[{"loc": ["email"]}])
    assert error.to_dict() == {
        "message": "Validation error",
        "status": 400,
        "issues": [{"loc": ["email"]}],
    }


def test_unmatched_route_uses_envelope(app, client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": {"message": "Not found", "status": 404}}


def test_wrong_method_is_405(app, client):
    resp = client.get("/api/alerts/trigger")
    assert resp.status_code == 405
    assert resp.get_json()["error"]["status"] == 405


def test_unexpected_exception_becomes_server_error(app, client):
    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    resp = client.get("/boom")
    assert resp.status_code == 500
    error = resp.get_json()["error"]
    assert error["status"] == 500
    assert error["message"] == "Server error"
    assert "kaboom" not in resp.get_data(as_text=True)


def test_debug_mode_does_not_leak_exception_text(app, client):
    app.debug = True

    @app.get("/leak")
    def leak():
        raise RuntimeError("UNIQUE constraint failed: user.email ['$2b$12$hash']")

    resp = client.get("/leak")
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": {"message": "Server error", "status": 500}}


def test_request_id_is_echoed_or_generated(app, client):
    echoed = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert echoed.headers["X-Request-ID"] == "abc-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]


def test_health(app, client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True
