"""Get user profile use case"""

from ...domain.exceptions import NotFoundError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ..dtos.user_dtos import UserProfileDto, UserStatsDto, user_to_dto


class GetUserProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> UserProfileDto:
        """Profile with the stored stats snapshot (not recomputed)"""
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

        return UserProfileDto(
            **user_to_dto(user).model_dump(),
            joined_date=user.created_at.date().isoformat(),
            stats=UserStatsDto(
                total_calls=user.stats.total_recordings,
                avg_spin_score=user.stats.avg_spin_score,
                total_appointments=user.stats.total_appointments,
            ),
        )
