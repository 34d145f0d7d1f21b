"""
Access Schemas

Pydantic models for the subject of a decision, schedules, grants,
templates and access-log entries.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AccessSubject(BaseModel):
    """The user a decision is made for."""

    model_config = ConfigDict(frozen=True)

    id: int
    roles: tuple[str, ...] = ()
    login: str = "Unknown"

    @classmethod
    def from_user(cls, user) -> "AccessSubject":
        return cls(id=user.id, roles=tuple(user.role_names), login=user.username)


class ScheduleData(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ScheduleResponse(ScheduleData):
    user_id: int
    status: str


class GrantUpdate(BaseModel):
    # Sanitized by the grant store; anything non-numeric is dropped there
    ids: list[int | str] = Field(default_factory=list)


class GrantResponse(BaseModel):
    user_id: int
    content_key: str
    ids: list[int]


class CopyAccessRequest(BaseModel):
    target_user_id: int
    include_schedule: bool = False


def _non_blank_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    content: dict[str, list[int | str]] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _non_blank_name(v)


class TemplateUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    content: dict[str, list[int | str]] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _non_blank_name(v)


class TemplateFromUser(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""


class TemplateApply(BaseModel):
    user_id: int
    merge: bool = False


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    content: dict[str, list[int]]
    created_at: datetime
    modified_at: datetime
    summary: dict[str, int] = Field(default_factory=dict)


class AccessLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time: datetime
    user_id: int | None
    user_login: str
    content_id: int
    content_title: str
    ip: str


class ContentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content_type: str
    title: str
    status: str
    author_id: int | None = None
    parent_id: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def status_value(cls, v):
        return getattr(v, "value", v)
