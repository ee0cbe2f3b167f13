"""Resend verification code use case"""

from ...domain.enums import OtpPurpose
from ...domain.exceptions import AlreadyVerifiedError, NotFoundError, UpstreamUnavailableError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...infrastructure.external_services.email_service import EmailService
from ..dtos.user_dtos import MessageResponse, ResendVerificationDto
from .one_time_code_issuer import OneTimeCodeIssuer


class ResendVerificationUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.codes = OneTimeCodeIssuer(unit_of_work, email_service)

    async def execute(self, request: ResendVerificationDto) -> MessageResponse:
        email = Email(request.email)

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise NotFoundError("User not found")
            if user.is_email_verified:
                raise AlreadyVerifiedError()

            code = await self.codes.issue(email.value, OtpPurpose.EMAIL_VERIFICATION)

        result = await self.codes.deliver(code, name=user.name)
        if not result.success:
            raise UpstreamUnavailableError("Failed to send verification email")

        return MessageResponse(message="Verification code sent successfully. Please check your email.")
