"""Logout use case"""

from ...domain.repositories.unit_of_work import IUnitOfWork
from ..dtos.user_dtos import MessageResponse
from .session_use_cases import AuthContext, SessionManager


class LogoutUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, sessions: SessionManager = None):
        self.sessions = sessions or SessionManager(unit_of_work)

    async def execute(self, context: AuthContext) -> MessageResponse:
        # Revoking twice is harmless
        await self.sessions.revoke(context.session)
        return MessageResponse(message="Logged out successfully")
