"""Session repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.session import Session
from ..value_objects.entity_ids import SessionId, UserId


class ISessionRepository(ABC):
    """Every mutating method is a single conditional UPDATE/DELETE so request
    handlers and the reaper can run concurrently without locks."""

    @abstractmethod
    async def add(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Session]:
        pass

    @abstractmethod
    async def list_active_for_user(self, user_id: UserId) -> List[Session]:
        """Active sessions, most recently used first"""
        pass

    @abstractmethod
    async def touch(self, session_id: SessionId, at: datetime) -> None:
        pass

    @abstractmethod
    async def revoke(self, session_id: SessionId) -> bool:
        """Deactivate one session; False when it was already inactive"""
        pass

    @abstractmethod
    async def revoke_all_for_user(self, user_id: UserId, except_token: Optional[str] = None) -> int:
        pass

    @abstractmethod
    async def revoke_expired(self, now: datetime) -> int:
        pass

    @abstractmethod
    async def delete_inactive(self, updated_before: datetime) -> int:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backing table can be used at all"""
        pass
