import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="crackit_tests_"))
os.environ["DB_DIR"] = str(_TMP_DIR)
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

import crackit.models.db  # noqa: F401
from crackit.app import app
from crackit.database import Base, SessionLocal, engine


SAMPLE_QUESTIONS = [
    {
        "question": "What is the powerhouse of the cell?",
        "options": ["Nucleus", "Mitochondria", "Ribosome", "Golgi"],
        "correctAnswer": 1,
    },
    {
        "question": "What carries genetic information?",
        "options": ["DNA", "ATP", "Lipids", "Glucose"],
        "correctAnswer": 0,
    },
    {
        "question": "Where does photosynthesis happen?",
        "options": ["Vacuole", "Cell wall", "Chloroplast", "Cytoplasm"],
        "correctAnswer": 2,
    },
]


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def sign_up(client: TestClient, email: str = "ana@example.com", password: str = "secret123") -> dict:
    response = client.post(
        "/api/auth/sign-up",
        json={
            "email": email,
            "password": password,
            "first_name": "Ana",
            "last_name": "Lopez",
            "university": "State University",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def sign_in(client: TestClient, email: str = "ana@example.com", password: str = "secret123") -> dict:
    response = client.post("/api/auth/sign-in", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(client: TestClient, email: str = "ana@example.com") -> dict[str, str]:
    sign_up(client, email=email)
    token = sign_in(client, email=email)["access_token"]
    return {"Authorization": f"Bearer {token}"}


def publish(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    payload = {
        "name": "Cell Biology Basics",
        "university": "State University",
        "class_name": "BIO 101",
        "tags": ["biology", "cells"],
        "description": "Intro quiz",
        "questions": SAMPLE_QUESTIONS,
    }
    payload.update(overrides)
    response = client.post("/api/tests", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def headers(client: TestClient) -> dict[str, str]:
    return auth_headers(client)
