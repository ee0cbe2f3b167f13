"""User ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Uuid, Enum as SQLEnum
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import UserRole


class UserModel(Base):
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    role = Column(SQLEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
                  default=UserRole.SALES_REP, nullable=False, index=True)
    company = Column(String, nullable=True)
    department = Column(String, nullable=True)

    is_email_verified = Column(Boolean, default=False, nullable=False)
    is_phone_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Denormalized stats snapshot
    stats_total_recordings = Column(Integer, default=0, nullable=False)
    stats_total_appointments = Column(Integer, default=0, nullable=False)
    stats_avg_spin_score = Column(Integer, default=0, nullable=False)
    stats_total_call_duration = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
    last_login = Column(DateTime, nullable=True)
