# gobarber/store.py
"""
Typed query methods over the scheduling tables.

Each store wraps the request's SQLModel session. Reads never commit;
`insert`/`create` only flush so the service decides where the transaction
ends.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select, col

from .clock import utcnow
from .errors import DuplicateSlotError
from .models import Appointment, File, Notification, User


class AppointmentStore:
    def __init__(self, session: Session):
        self.session = session

    def find_active_by_provider_and_date(self, provider_id: int, date: datetime) -> Optional[Appointment]:
        return self.session.exec(
            select(Appointment)
            .where(Appointment.provider_id == provider_id)
            .where(col(Appointment.canceled_at).is_(None))
            .where(Appointment.date == date)
        ).first()

    def find_by_id(self, appointment_id: int, with_participants: bool = False) -> Optional[Appointment]:
        stmt = select(Appointment).where(Appointment.id == appointment_id)
        if with_participants:
            stmt = stmt.options(
                selectinload(Appointment.provider),
                selectinload(Appointment.user),
            )
        return self.session.exec(stmt).first()

    def find_active_by_user(self, user_id: int, limit: int = 20, offset: int = 0) -> List[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.user_id == user_id)
            .where(col(Appointment.canceled_at).is_(None))
            .options(selectinload(Appointment.provider).selectinload(User.avatar))
            .order_by(Appointment.date, Appointment.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.exec(stmt).all())

    def find_by_provider_between(self, provider_id: int, start: datetime, end: datetime) -> List[Appointment]:
        stmt = (
            select(Appointment)
            .where(Appointment.provider_id == provider_id)
            .where(col(Appointment.canceled_at).is_(None))
            .where(Appointment.date >= start)
            .where(Appointment.date < end)
            .options(selectinload(Appointment.user))
            .order_by(Appointment.date)
        )
        return list(self.session.exec(stmt).all())

    def find_canceled_after(self, moment: datetime) -> List[Appointment]:
        """Canceled appointments still scheduled after `moment`."""
        stmt = (
            select(Appointment)
            .where(col(Appointment.canceled_at).is_not(None))
            .where(Appointment.date > moment)
            .options(
                selectinload(Appointment.provider),
                selectinload(Appointment.user),
            )
            .order_by(Appointment.id)
        )
        return list(self.session.exec(stmt).all())

    def insert(self, appointment: Appointment) -> Appointment:
        self.session.add(appointment)
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateSlotError(
                f"provider {appointment.provider_id} already booked at {appointment.date}"
            ) from exc
        return appointment

    def mark_canceled(self, appointment: Appointment, moment: datetime) -> bool:
        """
        Sets `canceled_at` only if the appointment is still active.

        Returns False when another request canceled it first; the row is
        left untouched in that case.
        """
        result = self.session.connection().execute(
            update(Appointment)
            .where(col(Appointment.id) == appointment.id)
            .where(col(Appointment.canceled_at).is_(None))
            .values(canceled_at=moment, updated_at=utcnow())
        )
        if result.rowcount == 0:
            self.session.rollback()
            return False

        self.session.commit()
        self.session.refresh(appointment)
        return True

    def commit(self, *instances) -> None:
        self.session.commit()
        for instance in instances:
            self.session.refresh(instance)

    def rollback(self) -> None:
        self.session.rollback()


class UserStore:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(
            select(User).where(User.email == email)
        ).first()

    def find_provider(self, user_id: int) -> Optional[User]:
        return self.session.exec(
            select(User).where(User.id == user_id).where(User.provider == True)  # noqa: E712
        ).first()

    def find_providers(self) -> List[User]:
        stmt = (
            select(User)
            .where(User.provider == True)  # noqa: E712
            .options(selectinload(User.avatar))
            .order_by(User.name, User.id)
        )
        return list(self.session.exec(stmt).all())

    def insert(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)  # fills user.id
        return user

    def update(self, user: User) -> User:
        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user


class FileStore:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, file_id: int) -> Optional[File]:
        return self.session.get(File, file_id)

    def insert(self, file: File) -> File:
        self.session.add(file)
        self.session.commit()
        self.session.refresh(file)
        return file


class NotificationStore:
    def __init__(self, session: Session):
        self.session = session

    def create(self, content: str, user_id: int) -> Notification:
        notification = Notification(content=content, user_id=user_id)
        self.session.add(notification)
        self.session.flush()
        return notification

    def list_for_user(self, user_id: int, limit: int = 20) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(col(Notification.created_at).desc(), col(Notification.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(stmt).all())

    def mark_read(self, notification_id: int, user_id: int) -> Optional[Notification]:
        notification = self.session.exec(
            select(Notification)
            .where(Notification.id == notification_id)
            .where(Notification.user_id == user_id)
        ).first()
        if notification is None:
            return None

        notification.read = True
        self.session.add(notification)
        self.session.commit()
        self.session.refresh(notification)
        return notification
