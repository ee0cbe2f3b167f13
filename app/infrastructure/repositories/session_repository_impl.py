"""Session repository implementation"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import inspect
from sqlalchemy.orm import Session as DbSession

from ...domain.repositories.session_repository import ISessionRepository
from ...domain.entities.session import Session
from ...domain.value_objects.device_info import DeviceInfo
from ...domain.value_objects.entity_ids import SessionId, UserId
from ..orm.session_model import SessionModel


class SessionRepositoryImpl(ISessionRepository):

    def __init__(self, session: DbSession):
        self.session = session

    async def add(self, session: Session) -> Session:
        model = SessionModel(
            id=session.id.value,
            user_id=session.user_id.value,
            token=session.token,
            refresh_token=session.refresh_token,
            device_info=session.device_info.to_dict(),
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            is_active=session.is_active,
            last_activity_at=session.last_activity_at,
            expires_at=session.expires_at,
            created_at=session.created_at,
            updated_at=session.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return session

    async def get_by_token(self, token: str) -> Optional[Session]:
        model = self.session.query(SessionModel).filter(SessionModel.token == token).first()
        return self._map_to_entity(model) if model else None

    async def list_active_for_user(self, user_id: UserId) -> List[Session]:
        models = (
            self.session.query(SessionModel)
            .filter(SessionModel.user_id == user_id.value, SessionModel.is_active.is_(True))
            .order_by(SessionModel.last_activity_at.desc())
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def touch(self, session_id: SessionId, at: datetime) -> None:
        (
            self.session.query(SessionModel)
            .filter(SessionModel.id == session_id.value)
            .update({SessionModel.last_activity_at: at})
        )

    async def revoke(self, session_id: SessionId) -> bool:
        updated = (
            self.session.query(SessionModel)
            .filter(SessionModel.id == session_id.value, SessionModel.is_active.is_(True))
            .update(self._deactivation())
        )
        return updated > 0

    async def revoke_all_for_user(self, user_id: UserId, except_token: Optional[str] = None) -> int:
        query = self.session.query(SessionModel).filter(
            SessionModel.user_id == user_id.value,
            SessionModel.is_active.is_(True),
        )
        if except_token:
            query = query.filter(SessionModel.token != except_token)
        return query.update(self._deactivation())

    async def revoke_expired(self, now: datetime) -> int:
        return (
            self.session.query(SessionModel)
            .filter(SessionModel.is_active.is_(True), SessionModel.expires_at < now)
            .update(self._deactivation(now))
        )

    async def delete_inactive(self, updated_before: datetime) -> int:
        return (
            self.session.query(SessionModel)
            .filter(SessionModel.is_active.is_(False), SessionModel.updated_at < updated_before)
            .delete()
        )

    def is_available(self) -> bool:
        return inspect(self.session.get_bind()).has_table(SessionModel.__tablename__)

    @staticmethod
    def _deactivation(now: Optional[datetime] = None) -> dict:
        return {SessionModel.is_active: False, SessionModel.updated_at: now or datetime.utcnow()}

    def _map_to_entity(self, model: SessionModel) -> Session:
        return Session(
            id=SessionId(model.id),
            user_id=UserId(model.user_id),
            token=model.token,
            refresh_token=model.refresh_token,
            device_info=DeviceInfo.from_dict(model.device_info),
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            is_active=model.is_active,
            last_activity_at=model.last_activity_at,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )
