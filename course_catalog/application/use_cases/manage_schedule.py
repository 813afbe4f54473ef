import structlog

from ...domain.entities import Course, Principal
from ...domain.errors import NotFound, ValidationError
from .manage_courses import ICourseRepository

logger = structlog.get_logger()

class IScheduleRepository:
    def get(self, user_id: str) -> list[str]: ...
    def add(self, user_id: str, course_id: str) -> list[str]: ...
    def remove(self, user_id: str, course_id: str) -> list[str]: ...


class ManageSchedule:
    def __init__(self, schedules: IScheduleRepository, courses: ICourseRepository):
        self.schedules = schedules
        self.courses = courses

    def list_mine(self, principal: Principal) -> list[Course]:
        by_id = {c.id: c for c in self.courses.list_all()}
        # курсы, удалённые после добавления, молча пропускаем
        return [by_id[cid] for cid in self.schedules.get(principal.id) if cid in by_id]

    def add(self, principal: Principal, course_id: str | None) -> list[str]:
        if course_id is None or not str(course_id).strip():
            raise ValidationError("courseId required")
        course_id = str(course_id).strip()
        if not self.courses.exists(course_id):
            raise NotFound("Course not found")
        ids = self.schedules.add(principal.id, course_id)
        logger.info("schedule_course_added", user_id=principal.id, course_id=course_id)
        return ids

    def remove(self, principal: Principal, course_id: str) -> list[str]:
        ids = self.schedules.remove(principal.id, str(course_id))
        logger.info("schedule_course_removed", user_id=principal.id, course_id=course_id)
        return ids
