"""
SMTP client wrapper for medication reminder e-mails.
"""
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from app.core.config import settings
from app.helpers.enums import NotificationChannel
from app.helpers.exception_handler import NotificationError

logger = logging.getLogger(__name__)


class EmailClient:
    """
    Sends e-mail through a configured SMTP relay.
    Every failure, including missing configuration, surfaces as NotificationError.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: Optional[bool] = None,
        sender: Optional[str] = None,
        timeout: float = 10.0
    ):
        self.host = host if host is not None else settings.SMTP_HOST
        self.port = port if port is not None else settings.SMTP_PORT
        self.username = username if username is not None else settings.SMTP_USERNAME
        self.password = password if password is not None else settings.SMTP_PASSWORD
        self.use_tls = use_tls if use_tls is not None else settings.SMTP_USE_TLS
        self.sender = sender or settings.MAIL_FROM
        self.timeout = timeout

    def send_email(self, to: str, subject: str, body: str, html: Optional[str] = None) -> None:
        if not to:
            raise NotificationError(NotificationChannel.EMAIL.value, "recipient address is empty")
        if not self.host:
            raise NotificationError(NotificationChannel.EMAIL.value, "SMTP_HOST is not configured")

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        if html:
            message.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(NotificationChannel.EMAIL.value, str(e)) from e
        logger.debug(f"E-mail sent to {to}: {subject}")


def get_email_client() -> EmailClient:
    return EmailClient()
