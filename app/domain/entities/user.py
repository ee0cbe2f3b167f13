"""User entity with business logic"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId
from ..enums import UserRole
from ..exceptions import AlreadyVerifiedError, ValidationError


@dataclass
class UserStats:
    """Denormalized counters shown on the profile page.

    Written once at creation; the live figures come from the dashboard
    aggregator.
    """
    total_recordings: int = 0
    total_appointments: int = 0
    avg_spin_score: int = 0
    total_call_duration: int = 0


@dataclass
class User:
    id: UserId
    email: Email
    hashed_password: str
    name: str
    phone: str
    role: UserRole = UserRole.SALES_REP
    company: Optional[str] = None
    department: Optional[str] = None
    is_email_verified: bool = False
    is_phone_verified: bool = False
    is_active: bool = True
    stats: UserStats = field(default_factory=UserStats)

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
    last_login: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        email: Email,
        hashed_password: str,
        name: str,
        phone: str,
        role: Optional[UserRole] = None,
        company: Optional[str] = None,
        department: Optional[str] = None,
    ) -> 'User':
        """Factory method to create a new, unverified user"""
        now = datetime.utcnow()
        return cls(
            id=UserId.generate(),
            email=email,
            hashed_password=hashed_password,
            name=name,
            phone=phone,
            role=role or UserRole.SALES_REP,
            company=company,
            department=department,
            created_at=now,
            updated_at=now,
        )

    def verify_email(self) -> None:
        """Business logic: verify user email"""
        if self.is_email_verified:
            raise AlreadyVerifiedError()

        self.is_email_verified = True
        self.updated_at = datetime.utcnow()

    def change_password(self, hashed_password: str) -> None:
        self.hashed_password = hashed_password
        self.updated_at = datetime.utcnow()

    def update_profile(self, name: Optional[str] = None, phone: Optional[str] = None) -> None:
        """Business logic: update contact details, at least one field required"""
        if not name and not phone:
            raise ValidationError("No fields provided to update")

        if name:
            self.name = name
        if phone:
            self.phone = phone
        self.updated_at = datetime.utcnow()

    def record_login(self) -> None:
        """Record user login"""
        self.last_login = datetime.utcnow()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
