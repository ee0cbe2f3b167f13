"""Login session ORM model"""

from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Index, JSON, Uuid
from sqlalchemy.sql import func

from ...db.models import Base


class SessionModel(Base):
    __tablename__ = "sessions"

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String, unique=True, nullable=False, index=True)
    refresh_token = Column(String, unique=True, nullable=True)
    device_info = Column(JSON, nullable=False, default=dict)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_activity_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_sessions_user_active", "user_id", "is_active"),
        Index("idx_sessions_active_expires", "is_active", "expires_at"),
    )

    def __repr__(self):
        return f"<SessionModel(id={self.id}, user_id={self.user_id}, active={self.is_active}, expires_at={self.expires_at})>"
