"""Appointment repository implementation"""

from typing import List, Optional
from sqlalchemy.orm import Session

from ...domain.repositories.appointment_repository import IAppointmentRepository
from ...domain.entities.appointment import Appointment
from ...domain.enums import AppointmentStatus
from ...domain.value_objects.date_window import DateWindow
from ...domain.value_objects.entity_ids import UserId
from ..orm.appointment_model import AppointmentModel


class AppointmentRepositoryImpl(IAppointmentRepository):

    def __init__(self, session: Session):
        self.session = session

    def _query_for_user(self, user_id: UserId, window: Optional[DateWindow]):
        query = self.session.query(AppointmentModel).filter(AppointmentModel.user_id == user_id.value)
        if window:
            query = query.filter(AppointmentModel.scheduled_date.between(window.start, window.end))
        return query

    async def count_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> int:
        return self._query_for_user(user_id, window).count()

    async def find_for_user(self, user_id: UserId, window: Optional[DateWindow] = None) -> List[Appointment]:
        models = self._query_for_user(user_id, window).order_by(AppointmentModel.scheduled_date.asc()).all()
        return [self._map_to_entity(model) for model in models]

    async def add(self, appointment: Appointment) -> Appointment:
        model = AppointmentModel(
            id=appointment.id,
            user_id=appointment.user_id.value,
            client_name=appointment.client_name,
            scheduled_date=appointment.scheduled_date,
            status=appointment.status,
            created_at=appointment.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return appointment

    def _map_to_entity(self, model: AppointmentModel) -> Appointment:
        return Appointment(
            id=model.id,
            user_id=UserId(model.user_id),
            client_name=model.client_name,
            scheduled_date=model.scheduled_date,
            status=AppointmentStatus(model.status),
            created_at=model.created_at,
        )
