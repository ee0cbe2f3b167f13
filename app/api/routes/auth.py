"""Authentication and session routes"""

from fastapi import APIRouter, Depends, Request, status

from ...api.dependencies import (
    client_context,
    get_auth_context,
    get_email_service,
    get_session_manager,
    get_unit_of_work,
)
from ...application.dtos.session_dtos import RevokeSessionsResponse, SessionListResponse
from ...application.dtos.user_dtos import (
    AuthResponse,
    CreateUserDto,
    ForgotPasswordDto,
    LoginUserDto,
    MessageResponse,
    RegistrationResponse,
    ResendVerificationDto,
    ResetPasswordDto,
    VerifyOtpDto,
)
from ...application.use_cases.email_verification_use_case import EmailVerificationUseCase
from ...application.use_cases.forgot_password_use_case import ForgotPasswordUseCase
from ...application.use_cases.login_user import LoginUserUseCase
from ...application.use_cases.logout_user import LogoutUserUseCase
from ...application.use_cases.register_user import RegisterUserUseCase
from ...application.use_cases.resend_verification_use_case import ResendVerificationUseCase
from ...application.use_cases.reset_password_use_case import ResetPasswordUseCase
from ...application.use_cases.session_use_cases import AuthContext, SessionManager
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService

router = APIRouter()


@router.post("/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: CreateUserDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    """Register a new user and send the verification code"""
    return await RegisterUserUseCase(unit_of_work, email_service).execute(user_data)


@router.post("/login", response_model=AuthResponse)
async def login_user(
    login_data: LoginUserDto,
    request: Request,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Login user"""
    use_case = LoginUserUseCase(unit_of_work)
    return await use_case.execute(login_data, client_context(request, login_data))


@router.post("/verify-otp", response_model=AuthResponse)
async def verify_otp(
    verify_data: VerifyOtpDto,
    request: Request,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Verify the email address with the emailed code and start a session"""
    use_case = EmailVerificationUseCase(unit_of_work)
    return await use_case.execute(verify_data, client_context(request, verify_data))


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    resend_data: ResendVerificationDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    return await ResendVerificationUseCase(unit_of_work, email_service).execute(resend_data)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    forgot_data: ForgotPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service)
):
    """Handle forgot password request"""
    return await ForgotPasswordUseCase(unit_of_work, email_service).execute(forgot_data)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    reset_data: ResetPasswordDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Reset password with the emailed code"""
    return await ResetPasswordUseCase(unit_of_work).execute(reset_data)


@router.post("/logout", response_model=MessageResponse)
async def logout_user(
    context: AuthContext = Depends(get_auth_context),
    sessions: SessionManager = Depends(get_session_manager)
):
    return await LogoutUserUseCase(sessions.unit_of_work, sessions).execute(context)


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    context: AuthContext = Depends(get_auth_context),
    sessions: SessionManager = Depends(get_session_manager)
):
    """Active sessions of the current user, most recently used first"""
    active = await sessions.list_active(context.user.id, current_token=context.token)
    return SessionListResponse(sessions=active)


@router.post("/revoke-sessions", response_model=RevokeSessionsResponse)
async def revoke_other_sessions(
    context: AuthContext = Depends(get_auth_context),
    sessions: SessionManager = Depends(get_session_manager)
):
    """Sign out everywhere except the current session"""
    count = await sessions.revoke_all_except(context.user.id, keep_token=context.token)
    return RevokeSessionsResponse(message=f"Revoked {count} other session(s)", revoked_count=count)
