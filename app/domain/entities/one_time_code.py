"""One-time code entity"""

import hmac
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from ..enums import OtpPurpose
from ..exceptions import AttemptsExhaustedError, CodeAlreadyUsedError, CodeExpiredError


@dataclass
class OneTimeCode:
    """Short-lived, attempt-limited code sent to an email address.

    Only the newest unused code per (email, purpose) is meant to be valid;
    the repository invalidates older ones when a new code is issued.
    """

    id: UUID
    email: str
    purpose: OtpPurpose
    code: str
    expires_at: datetime
    is_used: bool = False
    attempts: int = 0
    max_attempts: int = 5
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def issue(
        cls,
        email: str,
        purpose: OtpPurpose,
        code: str,
        ttl: timedelta,
        max_attempts: int,
        now: Optional[datetime] = None,
    ) -> "OneTimeCode":
        now = now or datetime.utcnow()
        return cls(
            id=uuid4(),
            email=email,
            purpose=purpose,
            code=code,
            expires_at=now + ttl,
            max_attempts=max_attempts,
            created_at=now,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) > self.expires_at

    def can_attempt(self) -> bool:
        return self.attempts < self.max_attempts

    def matches(self, candidate: str) -> bool:
        # compare_digest only accepts ASCII str, bytes work for any input
        return hmac.compare_digest(self.code.encode(), (candidate or "").strip().encode())

    def ensure_usable(self, now: Optional[datetime] = None) -> None:
        """Raise the error telling the client why this code can no longer be tried."""
        if self.is_used:
            raise CodeAlreadyUsedError()
        if self.is_expired(now):
            raise CodeExpiredError()
        if not self.can_attempt():
            raise AttemptsExhaustedError()

    def consume(self) -> None:
        self.is_used = True
