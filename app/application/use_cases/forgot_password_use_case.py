"""Forgot password use case"""

import logging

from ..dtos.user_dtos import ForgotPasswordDto, MessageResponse
from ...domain.enums import OtpPurpose
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...infrastructure.external_services.email_service import EmailService
from .one_time_code_issuer import OneTimeCodeIssuer

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If an account with that email exists, a password reset code has been sent."


class ForgotPasswordUseCase:
    """Send a password reset code.

    The response is the same whether or not the email is registered, and
    whether or not delivery succeeded.
    """

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.codes = OneTimeCodeIssuer(unit_of_work, email_service)

    async def execute(self, request: ForgotPasswordDto) -> MessageResponse:
        email = Email(request.email)

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                logger.info(f"Password reset requested for unknown email {email.value}")
                return MessageResponse(message=GENERIC_MESSAGE)

            code = await self.codes.issue(email.value, OtpPurpose.PASSWORD_RESET)

        await self.codes.deliver(code, name=user.name)
        return MessageResponse(message=GENERIC_MESSAGE)
