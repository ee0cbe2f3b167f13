"""Email service used as the notifier for one-time codes"""

import smtplib
import asyncio
import logging
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Any, Dict, Optional

from ...core.config import settings
from ...domain.enums import NotificationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    error: Optional[str] = None


class EmailService:
    """SMTP notifier.

    ``send`` never raises: every failure, including a timeout, is returned as
    an unsuccessful ``NotificationResult`` so callers can degrade gracefully.
    """

    def __init__(self, timeout: float = None):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME
        self.frontend_url = settings.FRONTEND_URL
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT_SECONDS

    async def send(self, kind: NotificationKind, recipient: str, payload: Dict[str, Any]) -> NotificationResult:
        """Render and deliver a notification of ``kind`` to ``recipient``"""
        try:
            subject, text_content = self._render(kind, payload)
        except KeyError as e:
            logger.error(f"Missing payload field {e} for {kind.value} notification")
            return NotificationResult(success=False, error=f"Missing payload field: {e}")

        return await self.send_email(recipient, subject, text_content)

    async def send_email(self, to_email: str, subject: str, text_content: str) -> NotificationResult:
        """Send a plain-text email with a bounded wait"""
        if not self.smtp_host:
            logger.warning(f"SMTP is not configured, email to {to_email} not sent")
            return NotificationResult(success=False, error="Email service is not configured")

        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = to_email
        msg.attach(MIMEText(text_content, 'plain'))

        try:
            await asyncio.wait_for(self._send_smtp_email(msg), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out after {self.timeout}s sending email to {to_email}")
            return NotificationResult(success=False, error="Email delivery timed out")
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"Error sending email to {to_email}: {e}")
            return NotificationResult(success=False, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error sending email to {to_email}")
            return NotificationResult(success=False, error=str(e))

        logger.info(f"Email sent to {to_email}: {subject}")
        return NotificationResult(success=True)

    async def _send_smtp_email(self, msg: MIMEMultipart):
        """Send email via SMTP"""
        def send_sync():
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                if self.smtp_use_tls:
                    server.starttls()
                if self.smtp_username:
                    server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

        # Run in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, send_sync)

    def _render(self, kind: NotificationKind, payload: Dict[str, Any]):
        name = payload.get("name") or "there"
        minutes = payload.get("expires_in_minutes", settings.OTP_EXPIRE_MINUTES)

        if kind == NotificationKind.EMAIL_VERIFICATION:
            subject = f"Verify your {self.from_name} account"
            body = (
                f"Hi {name},\n\n"
                f"Your verification code is: {payload['code']}\n\n"
                f"The code expires in {minutes} minutes.\n"
                f"If you didn't sign up for {self.from_name}, you can safely ignore this email."
            )
        elif kind == NotificationKind.PASSWORD_RESET:
            subject = f"Reset your {self.from_name} password"
            body = (
                f"Hi {name},\n\n"
                f"Your password reset code is: {payload['code']}\n\n"
                f"The code expires in {minutes} minutes.\n"
                f"If you didn't request a password reset, you can safely ignore this email."
            )
        else:
            raise KeyError(kind.value)
        return subject, body
