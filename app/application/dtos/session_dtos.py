"""Session DTOs"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from ...domain.value_objects.device_info import DeviceInfo


@dataclass(frozen=True)
class ClientContext:
    """Where a request came from, recorded on the session it creates"""
    device_info: DeviceInfo = field(default_factory=DeviceInfo)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class SessionDto(BaseModel):
    id: UUID
    device_info: Dict[str, Any]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    last_activity: datetime
    created_at: datetime
    expires_at: datetime
    is_current: bool


class SessionListResponse(BaseModel):
    success: bool = True
    sessions: List[SessionDto]


class RevokeSessionsResponse(BaseModel):
    success: bool = True
    message: str
    revoked_count: int
