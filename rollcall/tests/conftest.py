import sys
from pathlib import Path

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import scoped_session, sessionmaker
from alembic import command
from alembic.config import Config as AlembicConfig

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rollcall import create_app
from rollcall.extensions import db
from rollcall.core.auth import models as auth_models  # noqa: F401
from rollcall.core.auth.password import hash_password
from rollcall.core.auth.tokens import issue_token_pair
from rollcall.core.events import event_models  # noqa: F401
from rollcall.core.users.models import User
from rollcall.domains.alerts import models as alert_models  # noqa: F401
from rollcall.domains.responses import models as response_models  # noqa: F401


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _sqlite_disable_driver_transactions(dbapi_connection, connection_record):
    # pysqlite would otherwise turn the outermost SAVEPOINT into a real commit.
    dbapi_connection.isolation_level = None


def _sqlite_emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


def _alembic_config() -> AlembicConfig:
    cfg = AlembicConfig(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "rollcall" / "migrations"))
    # env.py resolves the database through create_app("testing").
    cfg.set_main_option("rollcall_env", "testing")
    return cfg


@pytest.fixture(scope="session", autouse=True)
def migrated_db():
    """Apply migrations once per session to mirror production schema."""
    cfg = _alembic_config()
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest.fixture()
def app(migrated_db):
    """
    Create a per-test app with an isolated database transaction.

    Each test runs inside its own transaction + savepoint so committed data
    rolls back afterwards, preventing cross-test leakage (e.g., duplicate emails).
    """
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()

    engine = db.engine
    if engine.dialect.name == "sqlite":
        sa.event.listen(engine, "connect", _sqlite_disable_driver_transactions)
        sa.event.listen(engine, "begin", _sqlite_emit_begin)

    connection = engine.connect()
    transaction = connection.begin()

    original_session = db.session
    # Every session (including ones recreated after request teardown) commits
    # into a savepoint of the outer transaction.
    session_factory = scoped_session(
        sessionmaker(bind=connection, expire_on_commit=False, join_transaction_mode="create_savepoint")
    )
    db.session = session_factory

    try:
        yield app
    finally:
        session_factory.remove()
        transaction.rollback()
        connection.close()
        db.session = original_session
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Factory inserting a user straight into the database."""
    password_hash = hash_password("secret123")

    def _make(email: str, *, name: str = "", area_id: str = "", device_token: str = "") -> User:
        user = User(
            email=email,
            name=name or email.split("@")[0],
            area_id=area_id,
            device_token=device_token,
            password_hash=password_hash,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture()
def auth_headers():
    """Bearer headers for a user object."""

    def _headers(user: User) -> dict[str, str]:
        tokens = issue_token_pair(user.id, user.email)
        return {"Authorization": f"Bearer {tokens['access_token']}"}

    return _headers
