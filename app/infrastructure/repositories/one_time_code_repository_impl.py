"""One-time code repository implementation"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from ...domain.repositories.one_time_code_repository import IOneTimeCodeRepository
from ...domain.entities.one_time_code import OneTimeCode
from ...domain.enums import OtpPurpose
from ..orm.one_time_code_model import OneTimeCodeModel


class OneTimeCodeRepositoryImpl(IOneTimeCodeRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, code: OneTimeCode) -> OneTimeCode:
        model = OneTimeCodeModel(
            id=code.id,
            email=code.email,
            purpose=code.purpose,
            code=code.code,
            is_used=code.is_used,
            attempts=code.attempts,
            max_attempts=code.max_attempts,
            expires_at=code.expires_at,
            created_at=code.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return code

    async def get_latest(self, email: str, purpose: OtpPurpose) -> Optional[OneTimeCode]:
        model = (
            self.session.query(OneTimeCodeModel)
            .filter(OneTimeCodeModel.email == email, OneTimeCodeModel.purpose == purpose)
            .order_by(OneTimeCodeModel.created_at.desc())
            .first()
        )
        return self._map_to_entity(model) if model else None

    async def invalidate_active(self, email: str, purpose: OtpPurpose) -> int:
        return (
            self.session.query(OneTimeCodeModel)
            .filter(
                OneTimeCodeModel.email == email,
                OneTimeCodeModel.purpose == purpose,
                OneTimeCodeModel.is_used.is_(False),
            )
            .update({OneTimeCodeModel.is_used: True})
        )

    async def register_failed_attempt(self, code_id: UUID) -> None:
        (
            self.session.query(OneTimeCodeModel)
            .filter(OneTimeCodeModel.id == code_id)
            .update({OneTimeCodeModel.attempts: OneTimeCodeModel.attempts + 1})
        )

    async def mark_used(self, code_id: UUID) -> None:
        (
            self.session.query(OneTimeCodeModel)
            .filter(OneTimeCodeModel.id == code_id)
            .update({OneTimeCodeModel.is_used: True})
        )

    async def delete_expired(self, expired_before: datetime) -> int:
        return (
            self.session.query(OneTimeCodeModel)
            .filter(OneTimeCodeModel.expires_at < expired_before)
            .delete()
        )

    def _map_to_entity(self, model: OneTimeCodeModel) -> OneTimeCode:
        return OneTimeCode(
            id=model.id,
            email=model.email,
            purpose=OtpPurpose(model.purpose),
            code=model.code,
            expires_at=model.expires_at,
            is_used=model.is_used,
            attempts=model.attempts,
            max_attempts=model.max_attempts,
            created_at=model.created_at,
        )
