"""Profile routes"""

from fastapi import APIRouter, Depends

from ...api.dependencies import get_auth_context, get_unit_of_work
from ...application.dtos.user_dtos import UpdateProfileDto, UserDto, UserProfileDto
from ...application.use_cases.get_user_profile import GetUserProfileUseCase
from ...application.use_cases.session_use_cases import AuthContext
from ...application.use_cases.update_user_profile import UpdateUserProfileUseCase
from ...domain.repositories.unit_of_work import IUnitOfWork

router = APIRouter()


@router.get("", response_model=UserProfileDto)
async def get_profile(
    context: AuthContext = Depends(get_auth_context),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Get current user profile"""
    return await GetUserProfileUseCase(unit_of_work).execute(context.user.id)


@router.put("", response_model=UserDto)
async def update_profile(
    profile_data: UpdateProfileDto,
    context: AuthContext = Depends(get_auth_context),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Update name and/or phone"""
    return await UpdateUserProfileUseCase(unit_of_work).execute(context.user.id, profile_data)
