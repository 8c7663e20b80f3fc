from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import ValidationError

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

REQUIRED_FIELDS = ("firstName", "lastName", "email")


class ContactBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("favorite_color", "birthday", mode="before", check_fields=False)
    @classmethod
    def empty_when_missing(cls, value):
        return "" if value is None else value


class ContactIn(ContactBase):
    """Body accepted by both create and update; all five fields are written."""

    first_name: str = Field(min_length=1, examples=["John"])
    last_name: str = Field(min_length=1, examples=["Doe"])
    email: str = Field(pattern=EMAIL_PATTERN, examples=["john.doe@example.com"])
    favorite_color: str = Field("", examples=["Blue"])
    birthday: str = Field("", description="YYYY-MM-DD", examples=["1990-01-15"])


class Contact(ContactBase):
    id: str = Field(alias="_id", examples=["60564fcb5450ae0015b90570"])
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    favorite_color: str = ""
    birthday: str = ""


class Message(BaseModel):
    message: str


class ContactCreated(Message):
    contact_id: str = Field(alias="contactId")


class ErrorBody(BaseModel):
    message: str
    error: str | None = None


def field_errors(errors: list[dict]) -> dict[str, str]:
    """Collapse pydantic error entries into ``{field: error type}``."""
    result = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = loc[0] if loc else "body"
        kind = err.get("type", "value_error")
        if field in REQUIRED_FIELDS and err.get("input") in ("", None):
            kind = "missing"
        result.setdefault(field, kind)
    return result


def validation_failure(errors: dict[str, str]) -> ValidationError:
    missing = [f for f in REQUIRED_FIELDS if errors.get(f) == "missing"]
    detail = ", ".join(f"{field}: {kind}" for field, kind in errors.items())
    if missing:
        return ValidationError("Missing required fields",
                               f"{', '.join(missing)} must be provided and non-empty")
    if errors.get("email") == "string_pattern_mismatch":
        return ValidationError("Invalid email format", detail)
    return ValidationError("Invalid contact data", detail)
