"""Update user profile use case"""

from ...domain.exceptions import NotFoundError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ..dtos.user_dtos import UpdateProfileDto, UserDto, user_to_dto


class UpdateUserProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, request: UpdateProfileDto) -> UserDto:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            user.update_profile(
                name=request.name.strip() if request.name else None,
                phone=request.phone.strip() if request.phone else None,
            )
            await self.unit_of_work.users.update(user)

        return user_to_dto(user)
