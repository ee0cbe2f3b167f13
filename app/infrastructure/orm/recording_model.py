"""Recording ORM Model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, JSON, Uuid, Enum as SQLEnum
from sqlalchemy.sql import func

from ...db.models import Base
from ...domain.enums import RecordingStatus


class RecordingModel(Base):
    __tablename__ = 'recordings'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    user_id = Column(Uuid, ForeignKey('users.id'), nullable=False, index=True)
    title = Column(String, nullable=False)
    duration = Column(Integer, nullable=True)  # seconds
    status = Column(SQLEnum(RecordingStatus, values_callable=lambda e: [m.value for m in e]),
                    default=RecordingStatus.ACTIVE, nullable=False, index=True)

    # Opaque output of the analysis vendor (transcription, sentiment, SPIN)
    analysis = Column(JSON, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_recordings_user_created", "user_id", "created_at"),
    )
