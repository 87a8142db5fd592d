# gobarber/errors.py

from typing import Optional


class SchedulingError(Exception):
    """Base class for errors the API reports back to the caller."""

    status_code = 400
    detail = "Bad request"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(SchedulingError):
    status_code = 422
    detail = "Validation fails"


class NotAProviderError(SchedulingError):
    status_code = 401
    detail = "You can only create appointments with providers"


class PastDateError(SchedulingError):
    status_code = 422
    detail = "Past dates are not permitted"


class SlotUnavailableError(SchedulingError):
    status_code = 409
    detail = "Appointment date is not available"


class ForbiddenError(SchedulingError):
    status_code = 403
    detail = "You don't have permission to cancel this appointment"


class TooLateError(SchedulingError):
    status_code = 422
    detail = "You can only cancel appointments 2 hours in advance"


class NotFoundError(SchedulingError):
    status_code = 404
    detail = "Appointment not found"


class AlreadyCanceledError(SchedulingError):
    status_code = 409
    detail = "Appointment already canceled"


class QueueDispatchError(Exception):
    """
    A job could not be submitted to the queue.

    Never rendered as an HTTP error: the cancellation service reports it in
    its outcome and the worker logs it.
    """


class DuplicateSlotError(Exception):
    """Raised by the store when the active-slot unique index rejects an insert."""
