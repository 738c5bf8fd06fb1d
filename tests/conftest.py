# tests/conftest.py
import os
import tempfile

# Тимчасова база SQLite і тека для фотографій мають бути задані до імпорту застосунку
_TMP_DIR = tempfile.mkdtemp(prefix="contact_manager_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'contacts.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ.pop("CLOUDINARY_CLOUD_NAME", None)

import pytest
from fastapi.testclient import TestClient

from contact_manager import models
from contact_manager.database import SessionLocal
from contact_manager.main import app


@pytest.fixture(autouse=True)
def clean_contacts():
    """
    Очищає таблицю контактів перед кожним тестом.
    """
    db = SessionLocal()
    try:
        db.query(models.Contact).delete()
        db.commit()
    finally:
        db.close()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """
    Фікстура для створення тестової сесії бази даних.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def upload_dir():
    return os.environ["UPLOAD_DIR"]
