"""Login session entity"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..value_objects.device_info import DeviceInfo
from ..value_objects.entity_ids import SessionId, UserId


@dataclass
class Session:
    """Server-side record backing a bearer token.

    Valid only while ``is_active`` and before ``expires_at``. Expiry is fixed
    at issuance; activity updates ``last_activity_at`` but never extends it.
    Revocation is terminal.
    """

    id: SessionId
    user_id: UserId
    token: str
    expires_at: datetime
    device_info: DeviceInfo = field(default_factory=DeviceInfo)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    refresh_token: Optional[str] = None
    is_active: bool = True
    last_activity_at: datetime = field(default_factory=datetime.utcnow)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def issue(
        cls,
        user_id: UserId,
        token: str,
        lifetime: timedelta,
        device_info: Optional[DeviceInfo] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Session":
        now = now or datetime.utcnow()
        return cls(
            id=SessionId.generate(),
            user_id=user_id,
            token=token,
            expires_at=now + lifetime,
            device_info=device_info or DeviceInfo(),
            ip_address=ip_address,
            user_agent=user_agent,
            last_activity_at=now,
            created_at=now,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return self.is_active and not self.is_expired(now)

    def revoke(self) -> None:
        self.is_active = False

    def touch(self, now: Optional[datetime] = None) -> None:
        self.last_activity_at = now or datetime.utcnow()
