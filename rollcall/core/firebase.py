"""Firebase Admin SDK bootstrap for push delivery."""

from __future__ import annotations

import json
import logging
import os
import threading

import firebase_admin
from firebase_admin import credentials
from flask import current_app

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "rollcall"
_init_lock = threading.Lock()


def _load_credentials() -> credentials.Base:
    raw_json = current_app.config.get("FIREBASE_SERVICE_ACCOUNT_JSON")
    if raw_json:
        return credentials.Certificate(json.loads(raw_json))

    cred_path = current_app.config.get("FIREBASE_CREDENTIALS_PATH")
    if cred_path:
        if not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        return credentials.Certificate(cred_path)

    logger.info("firebase.credentials using Application Default Credentials")
    return credentials.ApplicationDefault()


def get_firebase_app() -> firebase_admin.App:
    """Return the named Firebase app, initializing it on first use."""
    with _init_lock:
        try:
            return firebase_admin.get_app(FIREBASE_APP_NAME)
        except ValueError:
            pass
        app = firebase_admin.initialize_app(_load_credentials(), name=FIREBASE_APP_NAME)
        logger.info("firebase.initialized app=%s", FIREBASE_APP_NAME)
        return app
