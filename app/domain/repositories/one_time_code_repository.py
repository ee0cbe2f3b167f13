"""One-time code repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from ..entities.one_time_code import OneTimeCode
from ..enums import OtpPurpose


class IOneTimeCodeRepository(ABC):

    @abstractmethod
    async def add(self, code: OneTimeCode) -> OneTimeCode:
        pass

    @abstractmethod
    async def get_latest(self, email: str, purpose: OtpPurpose) -> Optional[OneTimeCode]:
        """Most recently issued code for the pair, used or not"""
        pass

    @abstractmethod
    async def invalidate_active(self, email: str, purpose: OtpPurpose) -> int:
        """Mark every unused code for the pair as used"""
        pass

    @abstractmethod
    async def register_failed_attempt(self, code_id: UUID) -> None:
        """Atomically increment the attempt counter"""
        pass

    @abstractmethod
    async def mark_used(self, code_id: UUID) -> None:
        pass

    @abstractmethod
    async def delete_expired(self, expired_before: datetime) -> int:
        pass
