# gobarber/routers/appointments_routes.py

from typing import List

from fastapi import APIRouter, Depends

from gobarber.auth import get_current_user
from gobarber.clock import Clock
from gobarber.deps import get_appointment_service, get_cancellation_service, get_clock, get_listing_service
from gobarber.models import User
from gobarber.schemas import AppointmentCreate, AppointmentListItem, AppointmentPublic, CancellationPublic
from gobarber.services import AppointmentService, CancellationService, ListingService

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.get("", response_model=List[AppointmentListItem])
def list_appointments(
    page: int = 1,
    service: ListingService = Depends(get_listing_service),
    current_user: User = Depends(get_current_user),
):
    return service.list(current_user.id, page)


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user),
):
    appointment = service.create(current_user.id, appt.provider_id, appt.date)
    return AppointmentPublic.build(appointment, clock.now())


@router.delete("/{appt_id}", response_model=CancellationPublic)
def cancel_appointment(
    appt_id: int,
    service: CancellationService = Depends(get_cancellation_service),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user),
):
    outcome = service.cancel(current_user.id, appt_id)
    return CancellationPublic(
        appointment=AppointmentPublic.build(outcome.appointment, clock.now()),
        email_queued=outcome.email_queued,
    )
