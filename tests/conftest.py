from datetime import datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token

from toolshed import create_app
from toolshed.config import TestingConfig
from toolshed.extensions import db
from toolshed.services.inventory_service import InventoryService


@pytest.fixture
def app():
    """Application with a fresh in-memory schema and a pushed app context."""
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Factory for Authorization headers carrying a signed JWT."""
    def _headers(user_id="student-0001", role="user", email=None):
        token = create_access_token(
            identity=user_id,
            additional_claims={"role": role, "email": email or f"{user_id}@campus.edu"},
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_item(app):
    """Factory creating a catalog item with its inventory record; returns the item id."""
    def _make(name="Flat end mill 6mm", total=10, borrowed=0, **extra):
        data = {"name": name, "type": "milling", "total_quantity": total, "total_borrowed": borrowed}
        data.update(extra)
        return InventoryService.create_item(data).id
    return _make


@pytest.fixture
def due_date():
    return (datetime.utcnow() + timedelta(days=7)).replace(microsecond=0).isoformat()
