# gobarber/availability.py

from datetime import date, datetime, time, timedelta
from typing import List

from .store import AppointmentStore

# Bookable hours of a working day, 08:00 to 19:00
WORKING_HOURS = range(8, 20)


def is_available(appointments: AppointmentStore, provider_id: int, candidate_hour: datetime) -> bool:
    """
    True when the provider has no active appointment at `candidate_hour`.

    `candidate_hour` must already be truncated to the hour.
    """
    return appointments.find_active_by_provider_and_date(provider_id, candidate_hour) is None


def day_availability(appointments: AppointmentStore, provider_id: int, day: date, now: datetime) -> List[dict]:
    day_start = datetime.combine(day, time.min)
    booked = {
        a.date
        for a in appointments.find_by_provider_between(provider_id, day_start, day_start + timedelta(days=1))
    }

    slots = []
    for hour in WORKING_HOURS:
        value = datetime.combine(day, time(hour))
        slots.append({
            "time": f"{hour:02d}:00",
            "value": value,
            "available": value > now and value not in booked,
        })
    return slots
