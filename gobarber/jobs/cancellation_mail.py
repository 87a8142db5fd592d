# gobarber/jobs/cancellation_mail.py

from datetime import datetime

from ..clock import format_long_date
from ..mail import Mailer
from ..models import Appointment


def cancellation_dedupe_key(appointment_id: int) -> str:
    return f"{CancellationMail.key}:{appointment_id}"


class CancellationMail:
    """Tells the provider that a client canceled an appointment."""

    key = "CancellationMail"

    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    @staticmethod
    def payload_for(appointment: Appointment) -> dict:
        return {
            "appointment": {
                "id": appointment.id,
                "date": appointment.date.isoformat(),
                "canceled_at": appointment.canceled_at.isoformat() if appointment.canceled_at else None,
                "user_id": appointment.user_id,
                "provider_id": appointment.provider_id,
                "provider": {
                    "name": appointment.provider.name,
                    "email": appointment.provider.email,
                },
                "user": {"name": appointment.user.name},
            }
        }

    def handle(self, payload: dict) -> None:
        appointment = payload["appointment"]
        provider = appointment["provider"]
        client = appointment["user"]
        date = datetime.fromisoformat(appointment["date"])

        self.mailer.send_mail(
            to=f"{provider['name']} <{provider['email']}>",
            subject="Appointment canceled",
            body=(
                f"Hello {provider['name']},\n\n"
                f"{client['name']} canceled the appointment scheduled for {format_long_date(date)}.\n"
            ),
        )
