"""Unit of Work interface for transaction management"""

from abc import ABC, abstractmethod

from .user_repository import IUserRepository
from .one_time_code_repository import IOneTimeCodeRepository
from .session_repository import ISessionRepository
from .recording_repository import IRecordingRepository
from .appointment_repository import IAppointmentRepository


class IUnitOfWork(ABC):
    """Unit of Work interface for managing transactions across repositories"""

    users: IUserRepository
    one_time_codes: IOneTimeCodeRepository
    sessions: ISessionRepository
    recordings: IRecordingRepository
    appointments: IAppointmentRepository

    @abstractmethod
    async def __aenter__(self):
        """Enter async context"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context"""
        pass

    @abstractmethod
    async def commit(self):
        """Commit transaction"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass
