"""One-time code ORM model"""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Index, Uuid, Enum as SQLEnum

from ...db.models import Base
from ...domain.enums import OtpPurpose


class OneTimeCodeModel(Base):
    __tablename__ = "one_time_codes"

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    email = Column(String, nullable=False, index=True)
    purpose = Column(SQLEnum(OtpPurpose, values_callable=lambda e: [m.value for m in e]), nullable=False)
    code = Column(String(16), nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    max_attempts = Column(Integer, default=5, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_one_time_codes_email_purpose_created", "email", "purpose", "created_at"),
    )

    def __repr__(self):
        return f"<OneTimeCodeModel(email={self.email}, purpose={self.purpose}, used={self.is_used})>"
