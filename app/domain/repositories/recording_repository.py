"""Recording repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.recording import Recording
from ..value_objects.date_window import DateWindow
from ..value_objects.entity_ids import UserId


class IRecordingRepository(ABC):

    @abstractmethod
    async def find_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> List[Recording]:
        """Non-deleted recordings of the user, oldest first, optionally limited to ``window``"""
        pass

    @abstractmethod
    async def add(self, recording: Recording) -> Recording:
        pass
