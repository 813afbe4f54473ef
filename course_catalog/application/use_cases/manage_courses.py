from contextlib import AbstractContextManager

import structlog

from ...domain.entities import Course, Principal, TEACHER
from ...domain.errors import Forbidden, NotFound
from ..dto import CourseCreate, CourseUpdate, parse_payload

logger = structlog.get_logger()

class ICourseRepository:
    def list_all(self) -> list[Course]: ...
    def get(self, course_id: str) -> Course | None: ...
    def exists(self, course_id: str) -> bool: ...
    def add(self, course: Course) -> Course: ...
    def save(self, course: Course) -> Course: ...
    def delete(self, course_id: str) -> bool: ...
    def locked(self) -> AbstractContextManager: ...


def matches(course: Course, q: str = "", subject: str = "") -> bool:
    q, subject = q.lower(), subject.lower()
    if q and q not in course.name.lower() and q not in course.description.lower():
        return False
    if subject and subject not in course.subject.lower():
        return False
    return True


class ManageCourses:
    """CRUD по курсам. Менять и удалять курс может только его автор."""

    def __init__(self, repo: ICourseRepository):
        self.repo = repo

    def list_courses(self, q: str | None = None, subject: str | None = None) -> list[Course]:
        courses = self.repo.list_all()
        if not q and not subject:
            return courses
        return [c for c in courses if matches(c, q or "", subject or "")]

    def create(self, principal: Principal, payload: CourseCreate | dict) -> Course:
        principal.require_role(TEACHER)
        data = parse_payload(CourseCreate, payload)
        course = self.repo.add(Course(
            id="",
            name=data.name,
            description=data.description,
            subject=data.subject,
            credits=data.credits,
            created_by=principal.id,
        ))
        logger.info("course_created", course_id=course.id, user_id=principal.id)
        return course

    def update(self, principal: Principal, course_id: str, payload: CourseUpdate | dict) -> Course:
        principal.require_role(TEACHER)
        changes = parse_payload(CourseUpdate, payload).changes()
        # чтение, проверка автора и запись под одной блокировкой коллекции
        with self.repo.locked():
            course = self._owned(principal, course_id, "modify")
            for field, value in changes.items():
                setattr(course, field, value)
            self.repo.save(course)
        logger.info("course_updated", course_id=course.id, user_id=principal.id)
        return course

    def delete(self, principal: Principal, course_id: str) -> str:
        principal.require_role(TEACHER)
        with self.repo.locked():
            course = self._owned(principal, course_id, "delete")
            if not self.repo.delete(course.id):
                raise NotFound()
        logger.info("course_deleted", course_id=course.id, user_id=principal.id)
        return course.id

    def _owned(self, principal: Principal, course_id: str, action: str) -> Course:
        course = self.repo.get(course_id)
        if course is None:
            raise NotFound()
        if not course.owned_by(principal.id):
            raise Forbidden(f"You can only {action} your own courses")
        return course
