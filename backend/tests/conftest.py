from __future__ import annotations

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "storetrack-test-signing-key-0123456789")

import pytest
from fastapi.testclient import TestClient

from app.core.db import Base, get_db, make_engine, make_sessionmaker
from app.models.enums import Category
from app.routers.deps import get_token_service
from app.schemas.product import ProductCreate
from app.services.auth import create_admin
from app.services.inventory import create_product

ADMIN_EMAIL = "admin@storetrack.com"
ADMIN_PASSWORD = "password123"


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", isolation_level="SERIALIZABLE")
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    session = make_sessionmaker(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_product(db):
    def _make(name="Widget", supply=10, price=500, category=Category.ELECTRONICS):
        return create_product(
            db, ProductCreate(name=name, supply=supply, price=price, category=category)
        )

    return _make


@pytest.fixture
def client(engine):
    from app.main import app

    testing_session = make_sessionmaker(engine)

    def override_get_db():
        session = testing_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return create_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def auth_headers(admin):
    token = get_token_service().issue(admin.id, admin.email)
    return {"Authorization": f"Bearer {token}"}
