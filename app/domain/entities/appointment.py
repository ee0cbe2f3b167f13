"""Appointment entity (read side)"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from ..enums import AppointmentStatus
from ..value_objects.entity_ids import UserId


@dataclass
class Appointment:
    id: UUID
    user_id: UserId
    client_name: str
    scheduled_date: datetime
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    created_at: datetime = field(default_factory=datetime.utcnow)
