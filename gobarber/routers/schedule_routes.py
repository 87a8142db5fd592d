# gobarber/routers/schedule_routes.py

from datetime import date, datetime, time, timedelta
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gobarber.auth import get_current_user
from gobarber.db import get_session
from gobarber.deps import require_provider
from gobarber.models import User
from gobarber.schemas import ClientPublic, ScheduleItem
from gobarber.store import AppointmentStore

router = APIRouter(
    prefix="/schedule",
    tags=["schedule"],
)


@router.get("", response_model=List[ScheduleItem])
def provider_schedule(
    date: date,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_provider(current_user)

    day_start = datetime.combine(date, time.min)
    appointments = AppointmentStore(session).find_by_provider_between(
        current_user.id, day_start, day_start + timedelta(days=1)
    )
    return [
        ScheduleItem(id=a.id, date=a.date, user=ClientPublic(id=a.user.id, name=a.user.name))
        for a in appointments
    ]
