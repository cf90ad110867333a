"""Test fixtures: in-memory SQLite database, seeded tenants and users, and a
TestClient factory addressing a tenant by Host.

The environment is set before the application is imported, because settings,
the engine and the token service are built at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("HOST_FALLBACK_ENABLED", None)
os.environ.pop("FALLBACK_TENANT_SUBDOMAIN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from deviflow.database import Base, get_db
from deviflow.core.security import token_service
from deviflow.core.tenant_context import TenantScope
from deviflow.crud.user import user as user_crud
from deviflow.models.tenant import Tenant
from deviflow.models.user import Role

PASSWORD = "correct-horse-battery"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    """Fresh schema per test; dropped afterwards."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client_for(db):
    """
    Factory for TestClients addressed to a tenant subdomain.

    client_for("acme") sends `Host: acme.deviflow.test`; client_for() uses
    the bare "testserver" host, which names no tenant.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    def make(subdomain=None):
        host = f"{subdomain}.deviflow.test" if subdomain else "testserver"
        return TestClient(app, base_url=f"http://{host}")

    yield make
    app.dependency_overrides.clear()


def _tenant(db, id, name, subdomain, modules):
    tenant = Tenant(id=id, name=name, subdomain=subdomain, modules=modules)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def _user(db, tenant, email, role=Role.user, is_active=True):
    return user_crud.create_in_tenant(
        db, tenant, email=email, password=PASSWORD, role=role, is_active=is_active
    )


@pytest.fixture()
def acme(db):
    return _tenant(db, 7, "Acme", "acme", ["checklists"])


@pytest.fixture()
def globex(db):
    return _tenant(db, 8, "Globex", "globex", ["checklists", "maintenance"])


@pytest.fixture()
def initech(db):
    return _tenant(db, 9, "Initech", "initech", ["maintenance"])


@pytest.fixture()
def acme_admin(db, acme):
    return _user(db, acme, "admin@acme.test", Role.admin)


@pytest.fixture()
def acme_user(db, acme):
    return _user(db, acme, "user@acme.test", Role.user)


@pytest.fixture()
def acme_superadmin(db, acme):
    return _user(db, acme, "root@acme.test", Role.superadmin)


@pytest.fixture()
def globex_admin(db, globex):
    return _user(db, globex, "admin@globex.test", Role.admin)


@pytest.fixture()
def initech_admin(db, initech):
    return _user(db, initech, "admin@initech.test", Role.admin)


@pytest.fixture()
def make_user(db):
    """Create an extra user: make_user(tenant, email, role=..., is_active=...)."""
    return lambda tenant, email, **kwargs: _user(db, tenant, email, **kwargs)


@pytest.fixture()
def auth_headers():
    """Bearer header for a user, signed by the application's token service."""
    def headers(user):
        token = token_service.issue(
            user_id=user.id, tenant_id=user.tenant_id, role=user.role, email=user.email
        )
        return {"Authorization": f"Bearer {token}"}
    return headers


@pytest.fixture()
def scope_for():
    def scope(user):
        return TenantScope(user_id=user.id, tenant_id=user.tenant_id, role=user.role, email=user.email)
    return scope
