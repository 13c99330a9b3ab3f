"""
Core dependencies for route protection
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from paymirror.config.settings import settings
from paymirror.core.errors import UnauthorizedError, ForbiddenError
from paymirror.database.supabase_client import get_supabase
from paymirror.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 from us, not FastAPI's default
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Dict[str, Any]:
    """Extract the current user from the bearer token; cached on the request"""
    if getattr(request.state, "current_user", None) is not None:
        return request.state.current_user
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Unauthorized")
    user_data = auth_service.get_current_user(credentials.credentials)
    request.state.current_user = user_data
    return user_data


def is_admin(user_data: Dict[str, Any]) -> bool:
    """Check if user holds the configured admin role"""
    role = user_data.get("role") or ""
    return role.lower() == settings.admin_role_name.lower()


def require_admin(user_data: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency that only lets the admin role through"""
    if not is_admin(user_data):
        logger.info(f"User {user_data.get('id')} with role '{user_data.get('role')}' denied admin route")
        raise ForbiddenError("Forbidden: You do not have the required permissions.")
    return user_data
