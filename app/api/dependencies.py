"""API dependencies"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..db.database import get_db
from ..domain.exceptions import UnauthorizedError
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..domain.value_objects.device_info import DeviceInfo
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from ..infrastructure.external_services.email_service import EmailService
from ..application.dtos.session_dtos import ClientContext
from ..application.dtos.user_dtos import DeviceFieldsMixin
from ..application.use_cases.session_use_cases import AuthContext, SessionManager


# Missing credentials are reported by get_auth_context, not by HTTPBearer's 403
security = HTTPBearer(auto_error=False)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


def get_email_service() -> EmailService:
    """Get email service"""
    return EmailService()


def get_session_manager(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)) -> SessionManager:
    return SessionManager(unit_of_work)


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthContext:
    """Resolve the bearer token to a live session and record the activity"""
    if credentials is None:
        raise UnauthorizedError("Missing authentication token")

    context = await sessions.validate(credentials.credentials)
    await sessions.touch(context.session)
    return context


def client_context(request: Request, device: Optional[DeviceFieldsMixin] = None) -> ClientContext:
    """Describe the calling client from the request and optional device fields"""
    device_info = DeviceInfo.from_raw(**device.device_fields()) if device else DeviceInfo()
    return ClientContext(
        device_info=device_info,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
