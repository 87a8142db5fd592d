# gobarber/schemas.py

from pydantic import BaseModel, Field, StrictInt, field_validator
from datetime import datetime
from typing import Optional

from .models import Appointment, File, User


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class FilePublic(BaseModel):
    id: int
    path: str
    url: str

    @classmethod
    def build(cls, file: Optional[File]) -> Optional["FilePublic"]:
        if file is None:
            return None
        return cls(id=file.id, path=file.path, url=file.url)


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=6, max_length=72)
    provider: bool = False


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    avatar_id: Optional[int] = None


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    provider: bool
    avatar: Optional[FilePublic] = None

    @classmethod
    def build(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            provider=user.provider,
            avatar=FilePublic.build(user.avatar),
        )


class ProviderPublic(BaseModel):
    id: int
    name: str
    avatar: Optional[FilePublic] = None


class AppointmentCreate(BaseModel):
    provider_id: StrictInt
    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def date_must_be_a_timestamp_string(cls, value):
        # pydantic would read bare numbers as unix epochs
        if not isinstance(value, (str, datetime)):
            raise ValueError("date must be an ISO 8601 string")
        return value


class AppointmentPublic(BaseModel):
    id: int
    date: datetime
    user_id: int
    provider_id: int
    canceled_at: Optional[datetime] = None
    past: bool
    cancelable: bool

    @classmethod
    def build(cls, appointment: Appointment, now: datetime) -> "AppointmentPublic":
        return cls(
            id=appointment.id,
            date=appointment.date,
            user_id=appointment.user_id,
            provider_id=appointment.provider_id,
            canceled_at=appointment.canceled_at,
            past=appointment.is_past(now),
            cancelable=appointment.is_cancelable(now),
        )


class AppointmentListItem(BaseModel):
    id: int
    date: datetime
    past: bool
    cancelable: bool
    provider: ProviderPublic

    @classmethod
    def build(cls, appointment: Appointment, now: datetime) -> "AppointmentListItem":
        provider = appointment.provider
        return cls(
            id=appointment.id,
            date=appointment.date,
            past=appointment.is_past(now),
            cancelable=appointment.is_cancelable(now),
            provider=ProviderPublic(
                id=provider.id,
                name=provider.name,
                avatar=FilePublic.build(provider.avatar),
            ),
        )


class CancellationPublic(BaseModel):
    appointment: AppointmentPublic
    email_queued: bool


class AvailableSlot(BaseModel):
    time: str
    value: datetime
    available: bool


class ClientPublic(BaseModel):
    id: int
    name: str


class ScheduleItem(BaseModel):
    id: int
    date: datetime
    user: ClientPublic


class NotificationPublic(BaseModel):
    id: int
    content: str
    read: bool
    created_at: datetime
