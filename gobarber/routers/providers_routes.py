# gobarber/routers/providers_routes.py

from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gobarber.auth import get_current_user
from gobarber.availability import day_availability
from gobarber.clock import Clock
from gobarber.db import get_session
from gobarber.deps import get_clock
from gobarber.errors import NotFoundError
from gobarber.models import User
from gobarber.schemas import AvailableSlot, UserPublic
from gobarber.store import AppointmentStore, UserStore

router = APIRouter(
    prefix="/providers",
    tags=["providers"],
)


@router.get("", response_model=List[UserPublic])
def list_providers(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return [UserPublic.build(p) for p in UserStore(session).find_providers()]


@router.get("/{provider_id}/available", response_model=List[AvailableSlot])
def provider_availability(
    provider_id: int,
    date: date,
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    current_user: User = Depends(get_current_user),
):
    if UserStore(session).find_provider(provider_id) is None:
        raise NotFoundError("Provider not found")

    return day_availability(AppointmentStore(session), provider_id, date, clock.now())
