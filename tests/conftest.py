from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

import config.urls  # noqa: F401  pydantic schemas must build before freeze_time
from modules.products.models import Product
from modules.users.constants import Role

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def barista():
    return User.objects.create_user(
        username="barista",
        password="barista123",
        email="barista@bakery.local",
        first_name="Malin",
        last_name="Castro",
        role=Role.BARISTA,
    )


@pytest.fixture()
def admin_user():
    return User.objects.create_user(
        username="admin",
        password="admin1234",
        email="admin@bakery.local",
        first_name="Göran",
        last_name="Rich",
        role=Role.ADMIN,
    )


@pytest.fixture()
def auth_client(barista):
    """APIClient force-authenticated as a barista."""
    client = APIClient()
    client.force_authenticate(user=barista)
    return client


@pytest.fixture()
def admin_client(admin_user):
    """APIClient force-authenticated as an administrator."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture()
def croissant():
    return Product.objects.create(name="Croissant", price=Decimal("2.50"))


@pytest.fixture()
def bagel():
    return Product.objects.create(name="Bagel", price=Decimal("3.00"))
