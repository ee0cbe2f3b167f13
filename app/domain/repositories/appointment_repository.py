"""Appointment repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.appointment import Appointment
from ..value_objects.date_window import DateWindow
from ..value_objects.entity_ids import UserId


class IAppointmentRepository(ABC):

    @abstractmethod
    async def count_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> int:
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> List[Appointment]:
        pass

    @abstractmethod
    async def add(self, appointment: Appointment) -> Appointment:
        pass
