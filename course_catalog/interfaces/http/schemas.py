from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...application.dto import CourseCreate, CourseUpdate

class LoginReq(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

class UserResp(BaseModel):
    id: str
    username: str
    role: str

class LoginResp(BaseModel):
    token: str
    user: UserResp

class CourseOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    name: str
    description: str = ""
    subject: str
    credits: int | float
    created_by: str | None = Field(default=None, alias="createdBy")

class CourseDeleteResp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    deleted_id: str = Field(alias="deletedId")

class ScheduleAddReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: str | None = Field(default=None, alias="courseId")

    @field_validator("course_id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # фронтенд может прислать числовой id
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

class ScheduleResp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    course_ids: list[str] = Field(alias="courseIds")

__all__ = [
    "LoginReq", "UserResp", "LoginResp",
    "CourseCreate", "CourseUpdate", "CourseOut", "CourseDeleteResp",
    "ScheduleAddReq", "ScheduleResp",
]
