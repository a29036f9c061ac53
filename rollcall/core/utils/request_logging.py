"""Per-request access logging with an ``X-Request-ID`` correlation id."""

from __future__ import annotations

import logging
import re
import time
from uuid import uuid4

from flask import Flask, g, request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_SECRET_QUERY_PARAM = re.compile(r"([?&](token|refreshToken|password)=)[^&]*", re.IGNORECASE)


def sanitize_path(path: str) -> str:
    """Mask credential-like query parameters."""
    return _SECRET_QUERY_PARAM.sub(r"\1***", path)


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded.strip():
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _full_path() -> str:
    query = request.query_string.decode("utf-8", "replace")
    return f"{request.path}?{query}" if query else request.path


def register_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        g.request_started_at = time.perf_counter()
        body = request.get_json(silent=True) if request.is_json else None
        logger.debug(
            "http.request.start req_id=%s method=%s path=%s ip=%s body_keys=%s",
            g.request_id,
            request.method,
            sanitize_path(_full_path()),
            client_ip(),
            ",".join(list(body)[:12]) if isinstance(body, dict) and body else "-",
        )

    @app.after_request
    def _finish_request(response):
        request_id = g.get("request_id") or str(uuid4())
        response.headers[REQUEST_ID_HEADER] = request_id
        started = g.get("request_started_at")
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level,
            "http.request.finish req_id=%s method=%s path=%s status=%s duration_ms=%.2f outcome=%s user_id=%s error=%s",
            request_id,
            request.method,
            sanitize_path(_full_path()),
            status,
            duration_ms,
            "failed" if status >= 400 else "ok",
            g.get("auth_user_id") or "-",
            g.get("error_message") or "-",
        )
        return response
