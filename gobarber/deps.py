# gobarber/deps.py

from fastapi import Depends
from sqlmodel import Session

from .clock import Clock, SystemClock
from .db import get_session
from .errors import ForbiddenError
from .models import User
from .queue import JobQueue
from .services import AppointmentService, CancellationService, ListingService
from .store import AppointmentStore, NotificationStore, UserStore


def require_provider(user: User):
    if not user.provider:
        raise ForbiddenError("Only providers can access this resource")


def get_clock() -> Clock:
    return SystemClock()


def get_appointment_service(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> AppointmentService:
    return AppointmentService(
        appointments=AppointmentStore(session),
        users=UserStore(session),
        notifications=NotificationStore(session),
        clock=clock,
    )


def get_cancellation_service(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> CancellationService:
    return CancellationService(
        appointments=AppointmentStore(session),
        queue=JobQueue(session),
        clock=clock,
    )


def get_listing_service(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> ListingService:
    return ListingService(appointments=AppointmentStore(session), clock=clock)
