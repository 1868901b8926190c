"""Notice document models.

Field names and nesting follow the Airbrake v3 create-notice API
(https://airbrake.io/docs/api/#create-notice-v3). Optional fields default
to None and are left out of the serialized document entirely.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from errbit_notifier import __version__

NOTIFIER_NAME = "errbit-notifier"


class Severity(Enum):
    """Notice severity levels, valued by their wire token."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value


def serialize_severity(value: Severity | None) -> str:
    """Return the wire token for a severity, "invalid" when unset."""
    return (value or Severity.INVALID).value


class StackFrame(BaseModel):
    """One frame of a parsed backtrace. Every field is independently optional."""

    file: str | None = None
    function: str | None = None
    line: int | None = Field(default=None, ge=0)
    column: int | None = Field(default=None, ge=0)
    code: dict[str, str] | None = None

    def is_empty(self) -> bool:
        """True when no field is set."""
        return (
            self.file is None
            and self.function is None
            and self.line is None
            and self.column is None
            and self.code is None
        )


class ErrorInfo(BaseModel):
    """A single error entry of a notice."""

    model_config = ConfigDict(populate_by_name=True)

    type_: str = Field(alias="type")
    message: str
    backtrace: list[StackFrame] | None = None

    @field_validator("type_")
    @classmethod
    def type_is_single_token(cls, v: str) -> str:
        """Ensure the type is a non-empty token without whitespace."""
        if not v or len(v.split()) != 1 or v.strip() != v:
            raise ValueError(f"error type must be a single token, got {v!r}")
        return v


class UserInfo(BaseModel):
    """Identity of the user affected by the error."""

    id: str | None = None
    name: str | None = None
    email: str | None = None


class NotifierInfo(BaseModel):
    """Identifies the library that produced the notice."""

    name: str | None = NOTIFIER_NAME
    version: str | None = __version__
    url: str | None = None


class Context(BaseModel):
    """Execution context of a notice.

    Built from a Config snapshot; request and user fields are only set by
    callers mutating the built notice before sending it.
    """

    model_config = ConfigDict(populate_by_name=True)

    notifier: NotifierInfo | None = None
    environment: str | None = None
    severity: Severity | None = None
    component: str | None = None
    action: str | None = None
    os: str | None = None
    hostname: str | None = None
    language: str | None = None
    version: str | None = None
    url: str | None = None
    user_agent: str | None = Field(default=None, alias="userAgent")
    user_addr: str | None = Field(default=None, alias="userAddr")
    remote_addr: str | None = Field(default=None, alias="remoteAddr")
    root_directory: str | None = Field(default=None, alias="rootDirectory")
    user: UserInfo | None = None
    route: str | None = None
    http_method: str | None = Field(default=None, alias="httpMethod")

    @field_serializer("severity")
    def _serialize_severity(self, value: Severity | None) -> str:
        return serialize_severity(value)


class Notice(BaseModel):
    """The document reporting one error occurrence to the collector."""

    errors: list[ErrorInfo] = Field(min_length=1)
    context: Context = Field(default_factory=Context)
    environment: dict[str, str] | None = None
    session: dict[str, str] | None = None
    params: dict[str, str] | None = None

    def to_json(self) -> str:
        """Serialize to the canonical compact JSON text sent on the wire."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class NotifyResult(BaseModel):
    """Identifiers returned by the collector for an accepted notice."""

    id: str
    url: str
