# gobarber/services/listing.py

from typing import List

from ..clock import Clock
from ..errors import ValidationError
from ..schemas import AppointmentListItem
from ..store import AppointmentStore

PAGE_SIZE = 20


class ListingService:
    def __init__(self, appointments: AppointmentStore, clock: Clock):
        self.appointments = appointments
        self.clock = clock

    def list(self, requester_id: int, page: int = 1) -> List[AppointmentListItem]:
        """Active appointments of the requester, soonest first, 20 per page."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError("page must be a positive integer")

        appointments = self.appointments.find_active_by_user(
            requester_id,
            limit=PAGE_SIZE,
            offset=(page - 1) * PAGE_SIZE,
        )
        now = self.clock.now()
        return [AppointmentListItem.build(a, now) for a in appointments]
