import os
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("RATE_LIMITING_ENABLED", "false")
os.environ.setdefault("RUN_DB_MIGRATIONS", "true")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

from campus.config import get_settings, reset_settings_cache  # noqa: E402

reset_settings_cache()

from campus.database import Base, SessionLocal, engine  # noqa: E402
from services.catalogs.router import cafeteria_info_cache  # noqa: E402
from services.portal.app import app as portal_app  # noqa: E402


@pytest.fixture(autouse=True, scope="function")
def _create_test_database() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    cafeteria_info_cache.clear()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session() -> Generator:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(portal_app) as test_client:
        yield test_client


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client: TestClient) -> dict[str, str]:
    settings = get_settings()
    response = client.post(
        "/api/auth/signin",
        json={"student_id": settings.admin_student_id, "password": settings.admin_password},
    )
    assert response.status_code == 200
    return bearer(response.json()["access_token"])


@pytest.fixture()
def make_student(client: TestClient) -> Callable[..., tuple[dict[str, str], dict]]:
    """Sign up a student and return (auth headers, user record)."""

    def _make(student_id: str, name: str = "Test Student", password: str = "password123"):
        response = client.post(
            "/api/auth/signup",
            json={"student_id": student_id, "name": name, "password": password},
        )
        assert response.status_code == 201
        body = response.json()
        return bearer(body["access_token"]), body["user"]

    return _make


@pytest.fixture()
def classroom(client: TestClient, admin_headers: dict[str, str]) -> dict:
    response = client.post(
        "/api/classrooms",
        json={"room": "1-201", "dept": "CSE", "floor": "1st Floor", "capacity": 80},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def lab(client: TestClient, admin_headers: dict[str, str]) -> dict:
    response = client.post(
        "/api/labs",
        json={
            "name": "CAD Lab",
            "dept": "Civil",
            "location": "2nd Floor, Room 2-210",
            "computers": 35,
            "status": "open",
            "hours": "8:00 AM - 6:00 PM",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()
