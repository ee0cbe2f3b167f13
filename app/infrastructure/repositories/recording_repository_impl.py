"""Recording repository implementation"""

from typing import List, Optional
from sqlalchemy.orm import Session

from ...domain.repositories.recording_repository import IRecordingRepository
from ...domain.entities.recording import Recording
from ...domain.enums import RecordingStatus
from ...domain.value_objects.date_window import DateWindow
from ...domain.value_objects.entity_ids import UserId
from ..orm.recording_model import RecordingModel


class RecordingRepositoryImpl(IRecordingRepository):

    def __init__(self, session: Session):
        self.session = session

    async def find_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> List[Recording]:
        query = self.session.query(RecordingModel).filter(
            RecordingModel.user_id == user_id.value,
            RecordingModel.status != RecordingStatus.DELETED,
        )
        if window:
            query = query.filter(RecordingModel.created_at.between(window.start, window.end))
        models = query.order_by(RecordingModel.created_at.asc()).all()
        return [self._map_to_entity(model) for model in models]

    async def add(self, recording: Recording) -> Recording:
        model = RecordingModel(
            id=recording.id,
            user_id=recording.user_id.value,
            title=recording.title,
            status=recording.status,
            analysis=recording.analysis,
            created_at=recording.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return recording

    def _map_to_entity(self, model: RecordingModel) -> Recording:
        return Recording(
            id=model.id,
            user_id=UserId(model.user_id),
            title=model.title,
            status=RecordingStatus(model.status),
            analysis=model.analysis or {},
            created_at=model.created_at,
        )
