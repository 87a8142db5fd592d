from .cancellation_mail import CancellationMail, cancellation_dedupe_key

__all__ = ["CancellationMail", "cancellation_dedupe_key"]
