"""Login user use case"""

import logging

from ...domain.exceptions import EmailNotVerifiedError, InvalidCredentialsError, UnauthorizedError
from ...domain.value_objects.email import Email
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import AuthResponse, LoginUserDto, user_to_dto
from ...core.security import verify_password
from ..dtos.session_dtos import ClientContext
from .session_use_cases import SessionManager

logger = logging.getLogger(__name__)


class LoginUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, sessions: SessionManager = None):
        self.unit_of_work = unit_of_work
        self.sessions = sessions or SessionManager(unit_of_work)

    async def execute(self, request: LoginUserDto, client: ClientContext = None) -> AuthResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(Email(request.email))

            # Same error for unknown email and wrong password
            if not user or not verify_password(request.password, user.hashed_password):
                raise InvalidCredentialsError()

            if not user.is_active:
                raise UnauthorizedError("Account is deactivated")

            if not user.is_email_verified:
                raise EmailNotVerifiedError()

            user.record_login()
            await self.unit_of_work.users.update(user)
            session = await self.sessions.issue(user.id, client)

        logger.info(f"User {user.id} logged in, session {session.id}")
        return AuthResponse(
            message="Login successful",
            token=session.token,
            session_id=session.id.value,
            expires_at=session.expires_at,
            user=user_to_dto(user),
        )
