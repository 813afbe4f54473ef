import json
import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient
from course_catalog.main import app
from course_catalog.infrastructure.rate_limit import limiter
from course_catalog.infrastructure.security import PasswordHasher, create_access_token
from course_catalog.infrastructure.store import JsonStore, get_store


@pytest.fixture(scope="session")
def teacher1_hash():
    """bcrypt-хэш считается один раз на сессию, он медленный"""
    return PasswordHasher().hash("password")


@pytest.fixture(autouse=True)
def no_rate_limit():
    """Отключаем rate limiting в тестах"""
    limiter.enabled = False
    yield
    limiter.enabled = False
    limiter.reset()


@pytest.fixture
def store(tmp_path, teacher1_hash):
    """Временный каталог с данными и тремя пользователями"""
    users = [
        {"id": "u1", "username": "teacher1", "role": "teacher", "passwordHash": teacher1_hash},
        {"id": "u2", "username": "teacher2", "role": "teacher", "password": "password"},
        {"id": "u3", "username": "student1", "role": "student", "password": "password"},
    ]
    (tmp_path / "users.json").write_text(json.dumps(users), encoding="utf-8")
    return JsonStore(tmp_path)


@pytest.fixture
def client(store):
    """Фикстура для тестового клиента"""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    # Очищаем после теста
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def teacher_token():
    return create_access_token("u1", "teacher1", "teacher")


@pytest.fixture
def other_teacher_token():
    return create_access_token("u2", "teacher2", "teacher")


@pytest.fixture
def student_token():
    return create_access_token("u3", "student1", "student")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
