from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field, StringConstraints, ValidationError as SchemaError

from ..domain.errors import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

def _reject_bool(v):
    # JSON true/false не считаем числом кредитов
    if isinstance(v, bool):
        raise ValueError("credits must be a number")
    return v

Credits = Annotated[int, Field(ge=0), BeforeValidator(_reject_bool)]

class CourseCreate(BaseModel):
    name: NonEmptyStr
    description: NonEmptyStr
    subject: NonEmptyStr
    credits: Credits

class CourseUpdate(BaseModel):
    name: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    subject: NonEmptyStr | None = None
    credits: Credits | None = None

    def changes(self) -> dict:
        """Только реально переданные поля (None = не менять)."""
        return self.model_dump(exclude_none=True)


def parse_payload(model: type[BaseModel], payload):
    """Приводит dict к схеме; ошибки схемы превращаются в ValidationError."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload or {})
    except SchemaError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            "Invalid course payload" + (f": {', '.join(fields)}" if fields else "")
        ) from e
