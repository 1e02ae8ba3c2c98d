import os

# SQLite before anything imports the engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dancey_portal.api.auth.auth import get_current_admin
from dancey_portal.api.deps import get_db, get_identity_service, get_storage_service
from dancey_portal.database import Base
from dancey_portal.exceptions import ExternalServiceError, NotFoundError
from dancey_portal.models.class_model import DanceClass
from dancey_portal.models.membership_model import Membership
from dancey_portal.schemas.auth_schema import AuthenticatedAdmin
from dancey_portal.services.storage_service import DeleteResult
from main import app

# 1. SQLite in-memory database shared by every session of a test
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# 2. Fakes for the external services

class FakeIdentity:
    """In-memory stand-in for the Firebase identity service."""

    def __init__(self):
        self.accounts = {}
        self.claims = {}
        self.disabled = {}
        self.fail_create = False
        self.app_users = [
            {"id": "u1", "name": "Alice Stone", "email": "alice@example.com", "status": "active"},
            {"id": "u2", "name": "Bob Reed", "email": "bob@example.com", "status": "active"},
            {"id": "u3", "name": "Carla Alvarez", "email": "carla@example.com", "status": "inactive"},
        ]

    def create_identity(self, uid, email, password, display_name, photo_url=None):
        if self.fail_create:
            raise ExternalServiceError("Failed to create identity account")
        self.accounts[uid] = email
        return uid

    def set_claims(self, uid, claims):
        self.claims[uid] = claims

    def disable_identity(self, uid, disabled):
        if uid not in self.accounts and uid not in {u["id"] for u in self.app_users}:
            raise NotFoundError("Identity account not found")
        self.disabled[uid] = disabled

    def delete_identity_by_email(self, email):
        for uid, account_email in list(self.accounts.items()):
            if account_email == email:
                del self.accounts[uid]
                return True
        return False

    def list_app_users(self, page, limit, search=None):
        users = self.app_users
        if search:
            users = [u for u in users if search.lower() in u["name"].lower()]
        start = (page - 1) * limit
        return users[start:start + limit], len(users)

    def set_app_user_status(self, uid, status):
        self.disable_identity(uid, status == "inactive")
        for user in self.app_users:
            if user["id"] == uid:
                user["status"] = status


class FakeStorage:
    """Records deletions; URLs listed in `failing` are reported as failed."""

    def __init__(self):
        self.deleted = []
        self.failing = set()

    def delete(self, urls_or_keys):
        result = DeleteResult()
        for item in urls_or_keys:
            if item in self.failing:
                result.failed_count += 1
                result.failed.append(item)
            else:
                self.deleted.append(item)
                result.deleted_count += 1
        return result

    def upload_image(self, prefix, filename, data, content_type):
        key = f"{prefix}{filename}"
        return {"url": f"https://test-bucket.s3.us-east-1.amazonaws.com/{key}", "key": key}

    def presigned_upload(self, prefix, file_name, file_type, file_size):
        key = f"{prefix}{file_name}"
        return {
            "presigned_url": f"https://test-bucket.s3.amazonaws.com/{key}?X-Amz-Signature=abc",
            "final_url": f"https://test-bucket.s3.us-east-1.amazonaws.com/{key}",
            "key": key,
        }


TEST_ADMIN = AuthenticatedAdmin(
    id="admin-1",
    name="Test Admin",
    email="admin@dancey.com",
    role="admin",
    status="active",
)


# 3. Fixtures

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(db, identity, storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_admin] = lambda: TEST_ADMIN
    app.dependency_overrides[get_identity_service] = lambda: identity
    app.dependency_overrides[get_storage_service] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# 4. Seed helpers

def add_membership(db, name="Monthly", price="30.00"):
    membership = Membership(membership_name=name, price_per_month=price)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return membership


def add_class(db, name="Salsa", price="10.00", active=True, **extra):
    db_class = DanceClass(
        class_name=name,
        class_description=f"{name} class for every level of dancer.",
        course_instructor="Jane Doe",
        image=extra.pop("image", f"https://test-bucket.s3.us-east-1.amazonaws.com/{name}.png"),
        overview_video=extra.pop("overview_video", ""),
        schedule=extra.pop("schedule", []),
        class_price=price,
        is_active=active,
        is_completed=extra.pop("is_completed", active),
        created_at=datetime.now(timezone.utc),
        **extra,
    )
    db.add(db_class)
    db.commit()
    db.refresh(db_class)
    return db_class
