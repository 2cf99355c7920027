from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; every stored timestamp is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MessageIn(BaseModel):
    """Inbound `sendMessage` payload. Every field is client-supplied."""
    username: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    department: str | None = None
    recipient_email: str | None = None
    is_private: bool = False

    @field_validator("is_private", mode="before")
    @classmethod
    def null_means_public(cls, v):
        return False if v is None else v


class MessageOut(BaseModel):
    message_id: int
    username: str
    content: str
    timestamp: datetime
    department: str | None
    recipient_email: str | None
    is_private: bool

    @field_validator("timestamp")
    @classmethod
    def timestamp_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class MessageBroadcast(BaseModel):
    """Outbound `receiveMessage` payload: the inbound fields plus the receipt time."""
    username: str
    content: str
    timestamp: datetime
    department: str | None
    recipient_email: str | None
    is_private: bool

    @field_validator("timestamp")
    @classmethod
    def timestamp_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
