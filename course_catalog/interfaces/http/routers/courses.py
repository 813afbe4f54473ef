from fastapi import APIRouter, Depends, Query, status

from ....domain.entities import Principal
from ....application.use_cases.manage_courses import ManageCourses
from ....infrastructure.repositories import CourseRepository
from ....infrastructure.store import JsonStore, get_store
from ..authz import require_teacher
from ..schemas import CourseOut, CourseCreate, CourseUpdate, CourseDeleteResp

router = APIRouter(prefix="/courses", tags=["courses"])

def get_courses(store: JsonStore = Depends(get_store)) -> ManageCourses:
    return ManageCourses(CourseRepository(store))

@router.get("", response_model=list[CourseOut])
def list_courses(q: str | None = Query(None, description="Search in name or description"),
                 subject: str | None = Query(None),
                 courses: ManageCourses = Depends(get_courses)):
    return [c.to_record() for c in courses.list_courses(q=q, subject=subject)]

# --- Teacher-only CRUD:

@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate,
                  principal: Principal = Depends(require_teacher),
                  courses: ManageCourses = Depends(get_courses)):
    return courses.create(principal, payload).to_record()

@router.put("/{course_id}", response_model=CourseOut)
def update_course(course_id: str, payload: CourseUpdate,
                  principal: Principal = Depends(require_teacher),
                  courses: ManageCourses = Depends(get_courses)):
    return courses.update(principal, course_id, payload).to_record()

@router.delete("/{course_id}", response_model=CourseDeleteResp)
def delete_course(course_id: str,
                  principal: Principal = Depends(require_teacher),
                  courses: ManageCourses = Depends(get_courses)):
    return CourseDeleteResp(ok=True, deletedId=courses.delete(principal, course_id))
