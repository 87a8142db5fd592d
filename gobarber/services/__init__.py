from .appointments import AppointmentService
from .cancellation import CancellationOutcome, CancellationService
from .listing import PAGE_SIZE, ListingService

__all__ = [
    "AppointmentService",
    "CancellationOutcome",
    "CancellationService",
    "ListingService",
    "PAGE_SIZE",
]
