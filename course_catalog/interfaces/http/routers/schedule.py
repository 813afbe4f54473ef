from fastapi import APIRouter, Depends

from ....domain.entities import Principal
from ....application.use_cases.manage_schedule import ManageSchedule
from ....infrastructure.repositories import CourseRepository, ScheduleRepository
from ....infrastructure.store import JsonStore, get_store
from ..authz import get_principal
from ..schemas import CourseOut, ScheduleAddReq, ScheduleResp

router = APIRouter(prefix="/schedule", tags=["schedule"])

def get_schedule(store: JsonStore = Depends(get_store)) -> ManageSchedule:
    return ManageSchedule(ScheduleRepository(store), CourseRepository(store))

@router.get("", response_model=list[CourseOut])
def my_schedule(principal: Principal = Depends(get_principal),
                schedule: ManageSchedule = Depends(get_schedule)):
    return [c.to_record() for c in schedule.list_mine(principal)]

@router.post("/add", response_model=ScheduleResp)
def add_course(payload: ScheduleAddReq,
               principal: Principal = Depends(get_principal),
               schedule: ManageSchedule = Depends(get_schedule)):
    return ScheduleResp(ok=True, courseIds=schedule.add(principal, payload.course_id))

@router.delete("/remove/{course_id}", response_model=ScheduleResp)
def remove_course(course_id: str,
                  principal: Principal = Depends(get_principal),
                  schedule: ManageSchedule = Depends(get_schedule)):
    # удаление отсутствующего курса — не ошибка
    return ScheduleResp(ok=True, courseIds=schedule.remove(principal, course_id))
