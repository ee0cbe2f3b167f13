"""Session lifecycle: issue, validate, touch, list and revoke"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from ...core.config import settings
from ...core.security import TokenSigner, token_signer
from ...domain.entities.session import Session
from ...domain.entities.user import User
from ...domain.exceptions import UnauthorizedError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ..dtos.session_dtos import ClientContext, SessionDto

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """Authenticated caller resolved from a bearer token"""
    user: User
    session: Session
    token: str


class SessionManager:
    """Operations on login sessions.

    ``issue`` runs inside the caller's unit of work so a session is only
    persisted together with whatever made it possible (a login, a verified
    email). The other operations open their own.
    """

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        signer: TokenSigner = None,
        lifetime: Optional[timedelta] = None,
    ):
        self.unit_of_work = unit_of_work
        self.signer = signer or token_signer
        self.lifetime = lifetime or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)

    async def issue(self, user_id: UserId, client: Optional[ClientContext] = None) -> Session:
        client = client or ClientContext()
        token = self.signer.sign({"sub": str(user_id), "type": "session"}, self.lifetime)
        session = Session.issue(
            user_id=user_id,
            token=token,
            lifetime=self.lifetime,
            device_info=client.device_info,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
        )
        await self.unit_of_work.sessions.add(session)
        return session

    async def validate(self, token: str) -> AuthContext:
        """Resolve a bearer token to its user and session.

        An expired session that is still marked active is revoked on the way
        out, so expiry takes effect even between reaper sweeps.
        """
        if not token:
            raise UnauthorizedError("Missing authentication token")

        now = datetime.utcnow()
        async with self.unit_of_work:
            session = await self.unit_of_work.sessions.get_by_token(token)
            if session is None or not session.is_active:
                raise UnauthorizedError("Invalid or expired session")

            if session.is_expired(now):
                await self.unit_of_work.sessions.revoke(session.id)
                await self.unit_of_work.commit()
                logger.info(f"Session {session.id} expired, revoked on access")
                raise UnauthorizedError("Session has expired")

            payload = self.signer.verify(token)
            if payload is None or payload.get("sub") != str(session.user_id):
                raise UnauthorizedError("Invalid or expired session")

            user = await self.unit_of_work.users.get_by_id(session.user_id)
            if user is None or not user.is_active:
                raise UnauthorizedError("User not found or inactive")

            return AuthContext(user=user, session=session, token=token)

    async def touch(self, session: Session) -> None:
        now = datetime.utcnow()
        async with self.unit_of_work:
            await self.unit_of_work.sessions.touch(session.id, now)
        session.touch(now)

    async def revoke(self, session: Session) -> bool:
        async with self.unit_of_work:
            revoked = await self.unit_of_work.sessions.revoke(session.id)
        session.revoke()
        if revoked:
            logger.info(f"Session {session.id} revoked")
        return revoked

    async def revoke_all_except(self, user_id: UserId, keep_token: Optional[str]) -> int:
        async with self.unit_of_work:
            count = await self.unit_of_work.sessions.revoke_all_for_user(user_id, except_token=keep_token)
        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def list_active(self, user_id: UserId, current_token: Optional[str] = None) -> List[SessionDto]:
        async with self.unit_of_work:
            sessions = await self.unit_of_work.sessions.list_active_for_user(user_id)

        return [
            SessionDto(
                id=session.id.value,
                device_info=session.device_info.to_dict(),
                ip_address=session.ip_address,
                user_agent=session.user_agent,
                last_activity=session.last_activity_at,
                created_at=session.created_at,
                expires_at=session.expires_at,
                is_current=session.token == current_token,
            )
            for session in sessions
        ]
