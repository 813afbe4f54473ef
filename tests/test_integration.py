from fastapi.testclient import TestClient
from jose import jwt
from prometheus_client import REGISTRY

from course_catalog.config import settings
from course_catalog.main import app
from conftest import bearer


def login(client, username, password="password"):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return response.json()["token"]


def test_liveness(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Backend is running!"
    assert client.get("/health").json() == {"status": "ok"}


def test_metrics(client):
    client.get("/courses")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text
    assert "store_operations_total" in response.text


def test_full_catalog_flow(client):
    """Интеграционный тест: преподаватель создаёт курс, студент собирает расписание"""
    # 1. Логин преподавателя
    teacher = login(client, "teacher1")
    claims = jwt.decode(teacher, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["role"] == "teacher"

    # 2. Создание курса
    created = client.post(
        "/courses",
        json={"name": "Algorithms", "description": "x", "subject": "CS", "credits": 3},
        headers=bearer(teacher),
    )
    assert created.status_code == 201
    course = created.json()
    assert course["id"]
    assert course["createdBy"] == "u1"

    # 3. Студент не может создавать курсы
    student = login(client, "student1")
    forbidden = client.post(
        "/courses",
        json={"name": "Hack", "description": "x", "subject": "CS", "credits": 1},
        headers=bearer(student),
    )
    assert forbidden.status_code == 403

    # 4. Студент находит курс и добавляет в расписание
    found = client.get("/courses", params={"subject": "cs", "q": "ALGO"}).json()
    assert [c["id"] for c in found] == [course["id"]]
    added = client.post("/schedule/add", json={"courseId": course["id"]}, headers=bearer(student))
    assert added.json() == {"ok": True, "courseIds": [course["id"]]}
    assert client.get("/schedule", headers=bearer(student)).json() == [course]

    # 5. Преподаватель обновляет курс, студент видит изменения
    updated = client.put(f"/courses/{course['id']}", json={"credits": 5}, headers=bearer(teacher))
    assert updated.status_code == 200
    assert client.get("/schedule", headers=bearer(student)).json()[0]["credits"] == 5

    # 6. Удаление курса: из расписания он пропадает, id остаётся в файле
    assert client.delete(f"/courses/{course['id']}", headers=bearer(teacher)).status_code == 200
    assert client.get("/schedule", headers=bearer(student)).json() == []
    removed = client.delete(f"/schedule/remove/{course['id']}", headers=bearer(student))
    assert removed.json() == {"ok": True, "courseIds": []}


def test_corrupt_store_returns_server_error(store):
    """Битый файл курсов — 500 без подробностей"""
    from course_catalog.infrastructure.store import get_store

    labels = {"method": "GET", "endpoint": "/courses", "status": "500"}
    before = REGISTRY.get_sample_value("http_requests_total", labels) or 0

    (store.data_dir / "courses.json").write_text("{not json", encoding="utf-8")
    app.dependency_overrides[get_store] = lambda: store
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/courses")
    finally:
        app.dependency_overrides.pop(get_store, None)
    assert response.status_code == 500
    assert response.json() == {"detail": "Server error"}
    # запрос с ошибкой тоже попадает в метрики
    assert REGISTRY.get_sample_value("http_requests_total", labels) == before + 1
