# gobarber/services/cancellation.py

import logging
from dataclasses import dataclass
from typing import Optional

from ..clock import Clock
from ..errors import AlreadyCanceledError, ForbiddenError, NotFoundError, QueueDispatchError, TooLateError
from ..jobs import CancellationMail, cancellation_dedupe_key
from ..models import Appointment, Job
from ..queue import JobQueue
from ..store import AppointmentStore

logger = logging.getLogger(__name__)


@dataclass
class CancellationOutcome:
    """A committed cancellation and what happened to its mail job."""
    appointment: Appointment
    job: Optional[Job] = None
    dispatch_error: Optional[QueueDispatchError] = None

    @property
    def email_queued(self) -> bool:
        return self.job is not None


class CancellationService:
    def __init__(self, appointments: AppointmentStore, queue: JobQueue, clock: Clock):
        self.appointments = appointments
        self.queue = queue
        self.clock = clock

    def cancel(self, requester_id: int, appointment_id: int) -> CancellationOutcome:
        appointment = self.appointments.find_by_id(appointment_id, with_participants=True)
        if appointment is None:
            raise NotFoundError()

        if appointment.user_id != requester_id:
            raise ForbiddenError()

        if appointment.canceled_at is not None:
            raise AlreadyCanceledError()

        now = self.clock.now()
        if not appointment.is_cancelable(now):
            raise TooLateError()

        if not self.appointments.mark_canceled(appointment, now):
            raise AlreadyCanceledError()
        logger.info("Appointment %s canceled by user %s", appointment.id, requester_id)

        # The cancellation stays committed even if the mail cannot be queued;
        # the worker's reconciliation pass picks it up later.
        outcome = CancellationOutcome(appointment=appointment)
        try:
            outcome.job = self.queue.enqueue(
                CancellationMail.key,
                CancellationMail.payload_for(appointment),
                dedupe_key=cancellation_dedupe_key(appointment.id),
            )
        except QueueDispatchError as exc:
            logger.exception("Appointment %s canceled but its cancellation mail was not queued", appointment.id)
            outcome.dispatch_error = exc
        return outcome
