# gobarber/services/appointments.py
"""
Appointment creation.

Checks run cheapest first: payload shape, provider role, date, then slot
availability. Nothing is written until all of them pass.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..availability import is_available
from ..clock import Clock, format_long_date, is_before, start_of_hour
from ..errors import (
    DuplicateSlotError,
    NotAProviderError,
    NotFoundError,
    PastDateError,
    SlotUnavailableError,
    ValidationError,
)
from ..models import Appointment
from ..schemas import AppointmentCreate
from ..store import AppointmentStore, NotificationStore, UserStore

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(
        self,
        appointments: AppointmentStore,
        users: UserStore,
        notifications: NotificationStore,
        clock: Clock,
    ):
        self.appointments = appointments
        self.users = users
        self.notifications = notifications
        self.clock = clock

    def create(self, requester_id: int, provider_id: Any, raw_date: Any) -> Appointment:
        # 1) Payload shape
        try:
            data = AppointmentCreate.model_validate({"provider_id": provider_id, "date": raw_date})
        except PydanticValidationError as exc:
            raise ValidationError() from exc

        # 2) Provider role
        provider = self.users.find_provider(data.provider_id)
        if provider is None:
            raise NotAProviderError()

        # 3) Past dates, the hour already under way included
        hour_start = start_of_hour(data.date)
        if not is_before(self.clock.now(), hour_start):
            raise PastDateError()

        # 4) Slot availability
        if not is_available(self.appointments, provider.id, hour_start):
            raise SlotUnavailableError()

        requester = self.users.find_by_id(requester_id)
        if requester is None:
            raise NotFoundError("User not found")

        appointment = Appointment(
            user_id=requester.id,
            provider_id=provider.id,
            date=hour_start,
        )
        try:
            self.appointments.insert(appointment)
        except DuplicateSlotError as exc:
            # lost the race against a concurrent booking of the same slot
            logger.info("Slot taken concurrently: %s", exc)
            raise SlotUnavailableError() from exc

        # Notify the provider in the same transaction as the booking
        try:
            self.notifications.create(
                content=f"New appointment from {requester.name} for {format_long_date(hour_start)}",
                user_id=provider.id,
            )
            self.appointments.commit(appointment)
        except SQLAlchemyError:
            self.appointments.rollback()
            raise

        logger.info(
            "Appointment %s booked: user=%s provider=%s date=%s",
            appointment.id, requester.id, provider.id, hour_start.isoformat(),
        )
        return appointment
