# gobarber/mail.py

import logging
import smtplib
from email.message import EmailMessage

from .config import settings

logger = logging.getLogger(__name__)


class Mailer:
    """Sends plain-text mail over SMTP, or only logs it when no host is configured."""

    def __init__(
        self,
        host: str = settings.mail_host,
        port: int = settings.mail_port,
        user: str = settings.mail_user,
        password: str = settings.mail_password,
        sender: str = settings.mail_from,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    def build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send_mail(self, to: str, subject: str, body: str) -> None:
        message = self.build_message(to, subject, body)

        if not self.host:
            logger.info("MAIL_HOST not set, mail to %s not sent:\n%s", to, message)
            return

        with smtplib.SMTP(self.host, self.port) as smtp:
            if self.user:
                smtp.starttls()
                smtp.login(self.user, self.password)
            smtp.send_message(message)
        logger.info("Mail %r sent to %s", subject, to)
