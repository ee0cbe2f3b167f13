"""Unit of Work implementation with proper async support"""

from sqlalchemy.orm import Session

from ...domain.repositories.unit_of_work import IUnitOfWork
from .user_repository_impl import UserRepositoryImpl
from .one_time_code_repository_impl import OneTimeCodeRepositoryImpl
from .session_repository_impl import SessionRepositoryImpl
from .recording_repository_impl import RecordingRepositoryImpl
from .appointment_repository_impl import AppointmentRepositoryImpl


class UnitOfWorkImpl(IUnitOfWork):

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepositoryImpl(session)
        self.one_time_codes = OneTimeCodeRepositoryImpl(session)
        self.sessions = SessionRepositoryImpl(session)
        self.recordings = RecordingRepositoryImpl(session)
        self.appointments = AppointmentRepositoryImpl(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            await self.rollback()
        else:
            await self.commit()

    async def commit(self) -> None:
        """Commit transaction"""
        try:
            self.session.commit()
        except Exception:
            self.rollback_sync()
            raise

    async def rollback(self) -> None:
        """Rollback transaction"""
        self.rollback_sync()

    def rollback_sync(self) -> None:
        """Synchronous rollback helper"""
        self.session.rollback()
