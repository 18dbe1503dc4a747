"""Pydantic models for Toggl API responses."""

from datetime import datetime, timedelta
from typing import Annotated, Any, Generic, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    field_validator,
    model_validator,
)

from toggl_client.errors import DecodeError

T = TypeVar("T")


def decode_duration(value: Any) -> timedelta:
    """Convert a Toggl duration (signed integer seconds) to a timedelta.

    Args:
        value: Decoded JSON value of the duration field.

    Returns:
        Duration of exactly ``value`` seconds.

    Raises:
        DecodeError: If the value is not an integer or is out of range.
    """
    if isinstance(value, timedelta):
        return value
    # bool is an int subclass but never a valid duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Couldn't decode Toggl duration: {value!r} is not an integer number of seconds")
    try:
        return timedelta(seconds=value)
    except OverflowError as e:
        raise DecodeError(f"Couldn't decode Toggl duration: {value} seconds is out of range") from e


def encode_duration(value: timedelta) -> int:
    """Convert a timedelta back to Toggl's integer seconds."""
    return int(value.total_seconds())


TogglDuration = Annotated[
    timedelta,
    PlainValidator(decode_duration),
    PlainSerializer(encode_duration, return_type=int),
]


class TogglModel(BaseModel):
    """Base model for Toggl payloads.

    Keys are matched case-insensitively, so ``"Email"`` and ``"email"`` both
    populate the ``email`` field.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key.lower() if isinstance(key, str) else key: value for key, value in data.items()}
        return data


class TimeEntry(TogglModel):
    """Toggl time entry model."""

    id: int
    description: str = ""
    workspace_id: int = Field(default=0, alias="wid")
    project_id: int | None = Field(default=None, alias="pid")
    guid: str = ""
    billable: bool = False
    start: datetime | None = None
    stop: datetime | None = None
    duration: TogglDuration = timedelta(0)
    duronly: bool = False
    user_id: int = Field(default=0, alias="uid")
    created_with: str = ""
    tags: list[str] = Field(default_factory=list)
    at: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("description", "guid", "created_with", "at", mode="before")
    @classmethod
    def _null_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_running(self) -> bool:
        """Running entries carry a negative duration."""
        return self.duration < timedelta(0)


class BlogPost(TogglModel):
    """Latest blog post announced in the user profile."""

    title: str = ""
    url: str = ""
    category: str = ""
    pub_date: str = ""


class User(TogglModel):
    """Toggl user profile model."""

    api_token: str = ""
    default_workspace_id: int = Field(default=0, alias="default_wid")
    email: str = ""
    jquery_timeofday_format: str = ""
    jquery_date_format: str = ""
    timeofday_format: str = ""
    date_format: str = ""
    store_start_and_stop_time: bool = False
    beginning_of_week: int = 0
    language: str = ""
    image_url: str = ""
    sidebar_piechart: bool = False
    at: datetime | None = None
    new_blog_post: BlogPost = Field(default_factory=BlogPost)
    send_product_emails: bool = False
    send_weekly_report: bool = False
    send_timer_notifications: bool = False
    openid_enabled: bool = False
    timezone: str = ""

    @field_validator("new_blog_post", mode="before")
    @classmethod
    def _null_blog_post(cls, value: Any) -> Any:
        return {} if value is None else value


class DataEnvelope(TogglModel, Generic[T]):
    """Wrapper for single-object responses: ``{"data": ...}``."""

    data: T
