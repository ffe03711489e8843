import pytest
from fastapi.testclient import TestClient

from hospital.auth import jwt_handler
from hospital.database import get_db
from hospital.main import app
from hospital.models.user import User


@pytest.fixture
def users(db_session):
    db_session.add_all([
        User(email='admin@hospital.org', hashed_password='', role='Admin'),
        User(email='house@hospital.org', hashed_password='', role='Doctor', doctor_id=1),
        User(email='cuddy@hospital.org', hashed_password='', role='Doctor', doctor_id=2),
        User(email='adler@example.org', hashed_password='', role='Patient', patient_id=1),
        User(email='merrell@example.org', hashed_password='', role='Patient', patient_id=2),
    ])
    db_session.commit()


@pytest.fixture
def client(db_session, users, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr('hospital.routes.doctor_routes.ensure_database_ready', lambda: None)
    monkeypatch.setattr('hospital.routes.appointment_routes.ensure_database_ready', lambda: None)
    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def build(email: str) -> dict[str, str]:
        return {'Authorization': f'Bearer {jwt_handler.create_access_token(subject=email)}'}

    return build
