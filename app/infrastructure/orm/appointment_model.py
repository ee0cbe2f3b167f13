"""Appointment ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Uuid, Enum as SQLEnum
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import AppointmentStatus


class AppointmentModel(Base):
    __tablename__ = 'appointments'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    user_id = Column(Uuid, ForeignKey('users.id'), nullable=False, index=True)
    client_name = Column(String, nullable=False)
    scheduled_date = Column(DateTime, nullable=False)
    status = Column(SQLEnum(AppointmentStatus, values_callable=lambda e: [m.value for m in e]),
                    default=AppointmentStatus.SCHEDULED, nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_appointments_user_scheduled", "user_id", "scheduled_date"),
    )
