"""Register user use case"""

import logging

from ...domain.entities.user import User
from ...domain.enums import OtpPurpose
from ...domain.exceptions import ConflictError
from ...domain.value_objects.email import Email
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService
from ...application.dtos.user_dtos import CreateUserDto, RegistrationResponse
from ...core.security import get_password_hash
from .one_time_code_issuer import OneTimeCodeIssuer

logger = logging.getLogger(__name__)


class RegisterUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, email_service: EmailService):
        self.unit_of_work = unit_of_work
        self.codes = OneTimeCodeIssuer(unit_of_work, email_service)

    async def execute(self, request: CreateUserDto) -> RegistrationResponse:
        email = Email(request.email)

        async with self.unit_of_work:
            if await self.unit_of_work.users.exists_by_email(email):
                raise ConflictError("Email already exists")

            user = User.create(
                email=email,
                hashed_password=get_password_hash(request.password),
                name=request.name.strip(),
                phone=request.phone.strip(),
                role=request.role,
                company=request.company,
                department=request.department,
            )
            user = await self.unit_of_work.users.add(user)
            code = await self.codes.issue(email.value, OtpPurpose.EMAIL_VERIFICATION)

        logger.info(f"Registered user {user.id} ({email.value})")

        # The account exists whatever happens to the email
        result = await self.codes.deliver(code, name=user.name)

        response = RegistrationResponse(
            message="User registered successfully. Please verify your email.",
            user_id=user.id.value,
            email=user.email.value,
            name=user.name,
            role=user.role.value,
            verification_email_sent=result.success,
        )
        if not result.success:
            response.message = "User registered but the verification email could not be sent"
            response.warning = "Request a new verification code to finish signing up"
        return response
