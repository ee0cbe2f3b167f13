"""Issuing and delivering one-time codes"""

import logging
from datetime import timedelta

from ...core.config import settings
from ...core.security import generate_otp_code
from ...domain.entities.one_time_code import OneTimeCode
from ...domain.enums import NotificationKind, OtpPurpose
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService, NotificationResult

logger = logging.getLogger(__name__)

_NOTIFICATION_KINDS = {
    OtpPurpose.EMAIL_VERIFICATION: NotificationKind.EMAIL_VERIFICATION,
    OtpPurpose.PASSWORD_RESET: NotificationKind.PASSWORD_RESET,
}


class OneTimeCodeIssuer:

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.email_service = email_service

    async def issue(self, email: str, purpose: OtpPurpose) -> OneTimeCode:
        """Invalidate any unused code for the pair and store a fresh one.

        Runs inside the caller's unit of work.
        """
        invalidated = await self.unit_of_work.one_time_codes.invalidate_active(email, purpose)
        if invalidated:
            logger.debug(f"Invalidated {invalidated} {purpose.value} code(s) for {email}")

        code = OneTimeCode.issue(
            email=email,
            purpose=purpose,
            code=generate_otp_code(),
            ttl=timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
            max_attempts=settings.OTP_MAX_ATTEMPTS,
        )
        return await self.unit_of_work.one_time_codes.add(code)

    async def deliver(self, code: OneTimeCode, name: str = None) -> NotificationResult:
        result = await self.email_service.send(
            _NOTIFICATION_KINDS[code.purpose],
            code.email,
            {"code": code.code, "name": name, "expires_in_minutes": settings.OTP_EXPIRE_MINUTES},
        )
        if not result.success:
            logger.warning(f"Could not deliver {code.purpose.value} code to {code.email}: {result.error}")
        return result
