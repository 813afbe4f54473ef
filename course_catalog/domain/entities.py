from dataclasses import dataclass

from .errors import Forbidden

TEACHER = "teacher"
STUDENT = "student"


@dataclass(frozen=True)
class User:
    id: str
    username: str
    role: str = STUDENT
    password_hash: str = ""


@dataclass(frozen=True)
class Principal:
    """Аутентифицированный пользователь, восстановленный из токена."""

    id: str
    username: str
    role: str

    def require_role(self, role: str) -> "Principal":
        if self.role != role:
            raise Forbidden(f"{role.capitalize()} only")
        return self


@dataclass
class Course:
    id: str
    name: str
    description: str
    subject: str
    credits: int
    created_by: str | None = None

    def owned_by(self, user_id: str) -> bool:
        # старые записи без createdBy может менять любой преподаватель
        return self.created_by is None or self.created_by == user_id

    def to_record(self) -> dict:
        row = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "subject": self.subject,
            "credits": self.credits,
        }
        if self.created_by is not None:
            row["createdBy"] = self.created_by
        return row

    @classmethod
    def from_record(cls, row: dict) -> "Course":
        created_by = row.get("createdBy")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            description=row.get("description") or "",
            subject=row.get("subject") or "",
            credits=row.get("credits", 0),
            created_by=str(created_by) if created_by not in (None, "") else None,
        )
