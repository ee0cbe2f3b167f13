"""Email verification use case"""

import logging

from ...domain.enums import OtpPurpose
from ...domain.exceptions import AlreadyVerifiedError, InvalidCodeError, NotFoundError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ...application.dtos.user_dtos import AuthResponse, VerifyOtpDto, user_to_dto
from ..dtos.session_dtos import ClientContext
from .session_use_cases import SessionManager

logger = logging.getLogger(__name__)


class EmailVerificationUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, sessions: SessionManager = None):
        self.unit_of_work = unit_of_work
        self.sessions = sessions or SessionManager(unit_of_work)

    async def execute(self, request: VerifyOtpDto, client: ClientContext = None) -> AuthResponse:
        """Check the latest verification code and sign the user in.

        A wrong code still counts as an attempt: the counter is committed
        before the error is raised.
        """
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(UserId(request.user_id))
            if not user:
                raise NotFoundError("User not found")

            if user.is_email_verified:
                raise AlreadyVerifiedError()

            code = await self.unit_of_work.one_time_codes.get_latest(
                user.email.value, OtpPurpose.EMAIL_VERIFICATION
            )
            if not code:
                raise NotFoundError("No verification code found")

            code.ensure_usable()

            if not code.matches(request.otp):
                await self.unit_of_work.one_time_codes.register_failed_attempt(code.id)
                await self.unit_of_work.commit()
                raise InvalidCodeError("Invalid verification code, try again")

            await self.unit_of_work.one_time_codes.mark_used(code.id)
            user.verify_email()
            user.record_login()
            await self.unit_of_work.users.update(user)
            session = await self.sessions.issue(user.id, client)

        logger.info(f"Email verified for user {user.id}")
        return AuthResponse(
            message="Email verified successfully",
            token=session.token,
            session_id=session.id.value,
            expires_at=session.expires_at,
            user=user_to_dto(user),
        )
