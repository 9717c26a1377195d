import os

# Settings are read once at import time, so the environment must be set first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["AWS_S3_BUCKET_NAME"] = "test-bucket"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["REVIEWER_DEFAULT_EMAIL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.dependencies import get_storage
from app.core.hasher import PasswordHelper
from app.core.security import jwt_manager
from app.models import Comment, Post, User
from app.utils.storage import StorageConfig, StorageError, StorageService
from main import app

BUCKET = "test-bucket"
PUBLIC_BASE = f"https://{BUCKET}.s3.us-east-1.amazonaws.com"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingStorage(StorageService):
    """Signs URLs with real boto3 (offline) but keeps objects in memory."""

    def __init__(self):
        super().__init__(
            StorageConfig(
                bucket=BUCKET,
                region="us-east-1",
                access_key_id="testing",
                secret_access_key="testing",
            )
        )
        self.uploaded = {}
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False

    def upload_file(self, body, key, content_type):
        if self.fail_upload:
            raise StorageError("bucket unavailable")
        self.uploaded[key] = (body, content_type)
        return self.public_url(key)

    def delete_file(self, key):
        if self.fail_delete:
            raise StorageError("access denied")
        self.deleted.append(key)


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
def storage():
    return RecordingStorage()


@pytest.fixture
def client(db, storage):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    yield TestClient(app)

    app.dependency_overrides.clear()


# Model factories
@pytest.fixture
def create_user(db):
    counter = {"n": 0}

    def _create_user(**kwargs):
        counter["n"] += 1
        user_data = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "hashed_password": PasswordHelper.hash_password("password123"),
        }
        user_data.update(kwargs)

        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create_user


@pytest.fixture
def create_post(db, create_user):
    def _create_post(**kwargs):
        if "author_id" not in kwargs:
            kwargs["author_id"] = create_user().id

        post = Post(**{"title": "Test Post", "content": "This is a test post", **kwargs})
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _create_post


@pytest.fixture
def create_comment(db, create_user, create_post):
    def _create_comment(**kwargs):
        if "post_id" not in kwargs:
            kwargs["post_id"] = create_post().id
        if "author_id" not in kwargs:
            kwargs["author_id"] = create_user().id

        comment = Comment(**{"content": "Test comment", **kwargs})
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment

    return _create_comment


# Authentication helpers
@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = jwt_manager.create_session_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
