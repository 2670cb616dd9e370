from __future__ import annotations

import os
import sys

import pytest
from werkzeug.security import generate_password_hash

# Ensure the dashboard package is importable when tests change directories
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, BASE_DIR)

os.environ.setdefault("RATELIMIT_ENABLED", "0")

from dashboard import create_admin_user, create_app, db  # noqa: E402
from dashboard.models import Customer, Invoice, User  # noqa: E402
from dashboard.utils.activity import flush_activity_logs  # noqa: E402


@pytest.fixture
def app(tmp_path, monkeypatch):
    os.environ.setdefault("SECRET_KEY", "testsecret")
    os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
    os.environ.setdefault("ADMIN_PASS", "adminpass")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "dashboard.db"))
    monkeypatch.delenv("CACHE_TYPE", raising=False)
    monkeypatch.delenv("CACHE_REDIS_URL", raising=False)
    monkeypatch.setenv("CACHE_DIR", str(tmp_path / "cache"))

    cwd = os.getcwd()
    os.chdir(tmp_path)
    app = create_app(["--demo"])
    os.chdir(cwd)

    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()

        yield app
        flush_activity_logs()
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    with app.app_context():
        user = User(
            name="User",
            email="user@example.com",
            password=generate_password_hash("123456"),
            active=True,
        )
        db.session.add(user)
        db.session.commit()
        return {"email": user.email, "password": "123456", "id": user.id}


@pytest.fixture
def customer(app):
    with app.app_context():
        customer = Customer(name="Evil Rabbit", email="evil@rabbit.com")
        db.session.add(customer)
        db.session.commit()
        return customer.id


@pytest.fixture
def invoice(app, customer):
    with app.app_context():
        invoice = Invoice(
            customer_id=customer, amount=1234, status="pending", date="2024-01-05"
        )
        db.session.add(invoice)
        db.session.commit()
        return invoice.id


@pytest.fixture
def sql_log(app):
    """Collect the SQL statements sent to the database while the test runs."""
    from sqlalchemy import event

    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append((statement, parameters))

    engine = db.engine
    event.listen(engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine, "before_cursor_execute", _record)


@pytest.fixture
def revalidations(monkeypatch):
    """Record calls to the list invalidation hook used by the actions."""
    calls = []
    monkeypatch.setattr("dashboard.actions.revalidate_path", calls.append)
    return calls
