"""Reset password use case"""

import logging

from ..dtos.user_dtos import MessageResponse, ResetPasswordDto
from ...core.config import settings
from ...core.security import get_password_hash
from ...domain.enums import OtpPurpose
from ...domain.exceptions import InvalidCodeError, NotFoundError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, revoke_sessions: bool = None):
        self.unit_of_work = unit_of_work
        if revoke_sessions is None:
            revoke_sessions = settings.REVOKE_SESSIONS_ON_PASSWORD_RESET
        self.revoke_sessions = revoke_sessions

    async def execute(self, request: ResetPasswordDto) -> MessageResponse:
        email = Email(request.email)

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise NotFoundError("User not found")

            code = await self.unit_of_work.one_time_codes.get_latest(email.value, OtpPurpose.PASSWORD_RESET)
            if not code or code.is_used:
                raise NotFoundError("No active reset code, request a new one")

            code.ensure_usable()

            if not code.matches(request.code):
                await self.unit_of_work.one_time_codes.register_failed_attempt(code.id)
                await self.unit_of_work.commit()
                raise InvalidCodeError("Invalid code, try again")

            user.change_password(get_password_hash(request.new_password))
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.one_time_codes.mark_used(code.id)

            revoked = 0
            if self.revoke_sessions:
                revoked = await self.unit_of_work.sessions.revoke_all_for_user(user.id)

        logger.info(f"Password reset for user {user.id}, {revoked} session(s) revoked")
        return MessageResponse(message="Password reset successfully. You can now login with your new password.")
