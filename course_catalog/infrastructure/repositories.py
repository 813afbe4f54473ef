from contextlib import AbstractContextManager
from uuid import uuid4

from ..domain.entities import User, Course
from ..domain.errors import NotFound
from ..application.use_cases.login_user import IUserRepository
from ..application.use_cases.manage_courses import ICourseRepository
from ..application.use_cases.manage_schedule import IScheduleRepository
from .store import JsonStore

def to_domain(row: dict) -> User:
    return User(
        id=str(row["id"]),
        username=row.get("username", ""),
        role=row.get("role", "student"),
        password_hash=row.get("passwordHash") or row.get("password") or "",
    )

class UserRepository(IUserRepository):
    def __init__(self, store: JsonStore): self.store = store

    def get_by_username(self, username: str) -> User | None:
        for row in self.store.read("users"):
            if row.get("username") == username:
                return to_domain(row)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        for row in self.store.read("users"):
            if str(row.get("id")) == str(user_id):
                return to_domain(row)
        return None


class CourseRepository(ICourseRepository):
    def __init__(self, store: JsonStore): self.store = store

    def list_all(self) -> list[Course]:
        return [Course.from_record(row) for row in self.store.read("courses")]

    def get(self, course_id: str) -> Course | None:
        for course in self.list_all():
            if course.id == str(course_id):
                return course
        return None

    def exists(self, course_id: str) -> bool:
        return self.get(course_id) is not None

    def locked(self) -> AbstractContextManager:
        return self.store.lock("courses")

    def add(self, course: Course) -> Course:
        with self.store.lock("courses"):
            rows = self.store.read("courses")
            taken = {str(r.get("id")) for r in rows}
            while not course.id or course.id in taken:
                course.id = new_course_id()
            rows.append(course.to_record())
            self.store.write("courses", rows)
        return course

    def save(self, course: Course) -> Course:
        with self.store.lock("courses"):
            rows = self.store.read("courses")
            idx = _index_of(rows, course.id)
            if idx is None:
                raise NotFound()
            rows[idx] = {**rows[idx], **course.to_record()}
            self.store.write("courses", rows)
        return course

    def delete(self, course_id: str) -> bool:
        with self.store.lock("courses"):
            rows = self.store.read("courses")
            idx = _index_of(rows, course_id)
            if idx is None:
                return False
            rows.pop(idx)
            self.store.write("courses", rows)
        return True


class ScheduleRepository(IScheduleRepository):
    """Расписания: {"<userId>": ["<courseId>", ...]}."""

    def __init__(self, store: JsonStore): self.store = store

    def get(self, user_id: str) -> list[str]:
        return _ids(self.store.read("schedules"), user_id)

    def add(self, user_id: str, course_id: str) -> list[str]:
        with self.store.lock("schedules"):
            data = self.store.read("schedules")
            ids = _ids(data, user_id)
            if str(course_id) not in ids:
                ids.append(str(course_id))
            data[str(user_id)] = ids
            self.store.write("schedules", data)
        return ids

    def remove(self, user_id: str, course_id: str) -> list[str]:
        with self.store.lock("schedules"):
            data = self.store.read("schedules")
            ids = [cid for cid in _ids(data, user_id) if cid != str(course_id)]
            data[str(user_id)] = ids
            self.store.write("schedules", data)
        return ids


def new_course_id() -> str:
    return "c" + uuid4().hex[:16]

def _index_of(rows: list[dict], course_id: str) -> int | None:
    for idx, row in enumerate(rows):
        if str(row.get("id")) == str(course_id):
            return idx
    return None

def _ids(data: dict, user_id: str) -> list[str]:
    raw = data.get(str(user_id)) or []
    if not isinstance(raw, list):
        return []
    # без дубликатов, порядок добавления сохраняется
    return list(dict.fromkeys(str(cid) for cid in raw))
