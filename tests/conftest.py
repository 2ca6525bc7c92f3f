"""
Shared fixtures: a Flask test client backed by an in-memory MongoDB.
"""

import os

# Keep app.py from connecting to a real server on import
os.environ["CREATE_APP_ON_IMPORT"] = "0"

import mongomock
import pytest

from app import create_app
from models import MongoStore


@pytest.fixture
def store():
    return MongoStore(client=mongomock.MongoClient(), db_name="onboarding_test")


@pytest.fixture
def uploads_dir(tmp_path):
    return str(tmp_path / "uploads")


@pytest.fixture
def app(store, uploads_dir):
    app = create_app(store=store, test_config={"TESTING": True, "UPLOADS_DIR": uploads_dir})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sample_form():
    return {
        "name": "Aman Sharma",
        "fatherName": "Ram Sharma",
        "phone": "9876543210",
        "address": "123 Main Street, Delhi",
        "email": "aman.sharma@company.com",
        "dob": "1990-01-15",
        "nationality": "Indian",
        "gender": "Male",
        "motherName": "Sita Sharma",
        "siblings": "One brother",
        "emergencyContact": "9876543212",
        "tenthPercent": "88.5",
        "twelfthPercent": "91",
        "ugPercent": "72.25",
    }
