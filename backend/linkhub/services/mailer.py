"""
Booking mailer.

Forwards booking/contact inquiries from the public site to the artist's
inbox over SMTP. smtplib is blocking, so sends run in a worker thread.
"""

import asyncio
import html
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, Optional

from linkhub.core.config import Settings
from linkhub.core.logging_config import get_logger

logger = get_logger(__name__)

SMTP_TIMEOUT_SECONDS = 30


class MailError(Exception):
    """Base class for booking mail failures."""


class MailNotConfigured(MailError):
    """SMTP_HOST, SMTP_USER or SMTP_PASS is not set."""


class MailDeliveryError(MailError):
    """The SMTP server refused or the connection failed."""


class BookingMailer:
    """
    Sends booking inquiries to ``settings.booking_email``.

    Attributes:
        settings: Application settings with the SMTP configuration
    """

    def __init__(
        self,
        settings: Settings,
        smtp_factory: Optional[Callable[..., smtplib.SMTP]] = None,
    ):
        """
        Args:
            settings: Application settings
            smtp_factory: Override for the SMTP client class (tests)
        """
        self.settings = settings
        if smtp_factory is None:
            smtp_factory = smtplib.SMTP_SSL if settings.smtp_secure else smtplib.SMTP
        self._smtp_factory = smtp_factory

    @property
    def is_configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_pass)

    def build_message(self, name: str, email: str, message: str) -> EmailMessage:
        """Compose the inquiry with plain text and HTML bodies."""
        s = self.settings
        msg = EmailMessage()
        msg["From"] = s.smtp_from or formataddr((name, s.smtp_user or ""))
        msg["To"] = s.booking_email
        msg["Subject"] = f"New booking inquiry from {name}"
        msg["Reply-To"] = email

        msg.set_content(
            "New booking/contact message:\n\n"
            f"Name: {name}\n"
            f"Email: {email}\n\n"
            "Message:\n"
            f"{message}\n"
        )

        safe_message = html.escape(message).replace("\n", "<br/>")
        msg.add_alternative(
            "<p><strong>New booking/contact message</strong></p>\n"
            f"<p><strong>Name:</strong> {html.escape(name)}</p>\n"
            f"<p><strong>Email:</strong> {html.escape(email)}</p>\n"
            f"<p><strong>Message:</strong><br/>{safe_message}</p>",
            subtype="html",
        )
        return msg

    async def send_inquiry(self, name: str, email: str, message: str) -> None:
        """
        Send one booking inquiry.

        Raises:
            MailNotConfigured: SMTP settings are incomplete
            MailDeliveryError: Sending failed
        """
        if not self.is_configured:
            logger.error(
                "SMTP configuration missing. Set SMTP_HOST, SMTP_USER, SMTP_PASS."
            )
            raise MailNotConfigured("Email not configured on server. Please contact admin.")

        msg = self.build_message(name, email, message)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                "Error sending booking email",
                extra={"error": str(exc), "smtp_host": self.settings.smtp_host},
                exc_info=True,
            )
            raise MailDeliveryError("Failed to send email") from exc

        logger.info("Booking inquiry sent", extra={"to": self.settings.booking_email})

    def _deliver(self, msg: EmailMessage) -> None:
        s = self.settings
        with self._smtp_factory(s.smtp_host, s.smtp_port, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
            if not s.smtp_secure:
                smtp.starttls()
            smtp.login(s.smtp_user, s.smtp_pass)
            smtp.send_message(msg)
