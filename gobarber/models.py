# gobarber/models.py

from typing import Optional
from datetime import datetime

from sqlalchemy import DateTime, Index, text
from sqlalchemy.types import JSON
from sqlmodel import SQLModel, Field, Column, Relationship

from .clock import utcnow, sub_hours
from .config import settings

# Minimum notice, in hours, required to cancel an appointment
CANCELLATION_LEAD_HOURS = 2


class File(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    path: str = Field(unique=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

    @property
    def url(self) -> str:
        return f"{settings.app_url}/files/{self.path}"


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    provider: bool = False
    avatar_id: Optional[int] = Field(default=None, foreign_key="file.id")
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

    avatar: Optional[File] = Relationship()


class Appointment(SQLModel, table=True):
    __table_args__ = (
        # one active appointment per provider and hour; canceled rows free the slot
        Index(
            "uq_appointment_provider_active_slot",
            "provider_id",
            "date",
            unique=True,
            sqlite_where=text("canceled_at IS NULL"),
            postgresql_where=text("canceled_at IS NULL"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    date: datetime = Field(index=True, sa_type=DateTime())
    user_id: int = Field(foreign_key="user.id", index=True)
    provider_id: int = Field(foreign_key="user.id", index=True)
    canceled_at: Optional[datetime] = Field(default=None, sa_type=DateTime())
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

    user: Optional[User] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Appointment.user_id]"}
    )
    provider: Optional[User] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Appointment.provider_id]"}
    )

    def is_past(self, now: datetime) -> bool:
        return self.date < now

    def is_cancelable(self, now: datetime) -> bool:
        return now < sub_hours(self.date, CANCELLATION_LEAD_HOURS)


class Notification(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    content: str
    user_id: int = Field(foreign_key="user.id", index=True)
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())


class Job(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    key: str = Field(index=True)
    dedupe_key: Optional[str] = Field(default=None, unique=True)
    payload: dict = Field(default_factory=dict, sa_column=Column(JSON))
    status: str = Field(default="pending", index=True)  # pending, done or failed
    attempts: int = 0
    last_error: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
