import pytest
from fastapi.testclient import TestClient

from patientor.config import Settings
from patientor.db.memory import InMemoryDB
from patientor.main import create_app

JOHN_MCCLANE_ID = "d2773336-f723-11e9-8f0b-362b9e155667"
HANS_GRUBER_ID = "d27736ec-f723-11e9-8f0b-362b9e155667"


@pytest.fixture
def settings():
    return Settings(SEED_DATA=True, RATE_LIMIT_MAX_REQUESTS=0)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    return InMemoryDB.seeded()


@pytest.fixture
def health_check_payload():
    return {
        "type": "HealthCheck",
        "description": "check",
        "date": "2024-01-01",
        "specialist": "Dr. X",
        "healthCheckRating": 0,
    }


@pytest.fixture
def occupational_payload():
    return {
        "type": "OccupationalHealthcare",
        "description": "Back pain after lifting",
        "date": "2024-02-10",
        "specialist": "Dr. Y",
        "diagnosisCodes": ["M51.2"],
        "employerName": "ACME",
        "sickLeave": {"startDate": "2024-02-10", "endDate": "2024-02-20"},
    }


@pytest.fixture
def hospital_payload():
    return {
        "type": "Hospital",
        "description": "Broken thumb",
        "date": "2024-03-01",
        "specialist": "MD House",
        "diagnosisCodes": ["S62.5"],
        "discharge": {"date": "2024-03-15", "criteria": "Thumb has healed."},
    }
