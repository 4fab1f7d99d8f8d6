"""
Shared pytest fixtures.

- `db`: in-memory Firestore double, injected through `app.dependency_overrides[get_db]`
- `client`: FastAPI TestClient; the lifespan (Firebase init) is not run
- Firebase ID token verification is replaced: `Bearer token-<uid>` authenticates as `<uid>`,
  anything else is rejected the way an invalid Firebase token is.
"""
import pytest
from fastapi.testclient import TestClient
from firebase_admin import auth as firebase_auth

from empoweru.database import get_db
from empoweru.main import app
from fakes import FakeFirestore


def auth_header(uid):
    return {"Authorization": f"Bearer token-{uid}"}


def _verify_id_token(id_token, check_revoked=False, **kwargs):
    if not id_token.startswith("token-"):
        raise firebase_auth.InvalidIdTokenError("Invalid ID token")
    return {"uid": id_token[len("token-"):]}


@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def client(db, monkeypatch):
    monkeypatch.setattr(firebase_auth, "verify_id_token", _verify_id_token)
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    db.seed("users", {"uid": "admin-1", "name": "Ada", "role": "admin"}, doc_id="admin-1")
    return "admin-1"


@pytest.fixture
def moderator(db):
    db.seed("users", {"uid": "mod-1", "name": "Mo", "role": "moderator"}, doc_id="mod-1")
    return "mod-1"


@pytest.fixture
def student(db):
    db.seed("users", {"uid": "stu-1", "name": "Sam", "role": "default"}, doc_id="stu-1")
    return "stu-1"


def scholarship(db, **fields):
    data = {
        "scholarshipName": "Global Excellence",
        "universityName": "Oxford",
        "universityCity": "Oxford",
        "universityCountry": "UK",
        "scholarshipCategory": "Full fund",
        "subjectCategory": "Engineering",
        "degree": "Masters",
        "applicationFee": 50,
        "serviceCharge": 10,
        "applicationDeadline": "30 June, 2025",
        "scholarshipPostDate": "01 January, 2025",
        "postedUserName": "Ada",
        "postedUserEmail": "ada@example.com",
        "postedUserUID": "admin-1",
    }
    data.update(fields)
    return db.seed("scholarships", data)


def reference(db, collection, doc_id):
    return db.collection(collection).document(doc_id)
