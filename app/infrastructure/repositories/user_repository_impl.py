"""User repository implementation"""

from typing import Optional
from sqlalchemy.orm import Session

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User, UserStats
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId
from ...domain.enums import UserRole
from ..orm.user_model import UserModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID"""
        model = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: Email) -> Optional[User]:
        """Get user by email"""
        model = self.session.query(UserModel).filter(UserModel.email == str(email)).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: Email) -> bool:
        """Check if user exists by email"""
        return self.session.query(UserModel.id).filter(UserModel.email == str(email)).first() is not None

    async def add(self, user: User) -> User:
        """Add a new user"""
        model = UserModel(id=user.id.value, created_at=user.created_at)
        self._update_model_from_entity(model, user)
        self.session.add(model)
        self.session.flush()
        return user

    async def update(self, user: User) -> User:
        """Update an existing user"""
        existing = self.session.query(UserModel).filter(UserModel.id == user.id.value).first()
        if existing:
            self._update_model_from_entity(existing, user)
            self.session.flush()
        return user

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        """Update ORM model from domain entity"""
        model.email = str(user.email)
        model.hashed_password = user.hashed_password
        model.name = user.name
        model.phone = user.phone
        model.role = user.role
        model.company = user.company
        model.department = user.department
        model.is_email_verified = user.is_email_verified
        model.is_phone_verified = user.is_phone_verified
        model.is_active = user.is_active
        model.stats_total_recordings = user.stats.total_recordings
        model.stats_total_appointments = user.stats.total_appointments
        model.stats_avg_spin_score = user.stats.avg_spin_score
        model.stats_total_call_duration = user.stats.total_call_duration
        model.updated_at = user.updated_at
        model.last_login = user.last_login

    def _map_to_entity(self, model: UserModel) -> User:
        """Map ORM model to domain entity"""
        return User(
            id=UserId(model.id),
            email=Email(model.email),
            hashed_password=model.hashed_password,
            name=model.name,
            phone=model.phone,
            role=UserRole(model.role),
            company=model.company,
            department=model.department,
            is_email_verified=model.is_email_verified,
            is_phone_verified=model.is_phone_verified,
            is_active=model.is_active,
            stats=UserStats(
                total_recordings=model.stats_total_recordings or 0,
                total_appointments=model.stats_total_appointments or 0,
                avg_spin_score=model.stats_avg_spin_score or 0,
                total_call_duration=model.stats_total_call_duration or 0,
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
            last_login=model.last_login,
        )
