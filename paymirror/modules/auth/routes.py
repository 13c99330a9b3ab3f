from fastapi import APIRouter, Depends
from paymirror.database.supabase_client import get_supabase
from paymirror.modules.auth.schemas import LoginRequest, TokenResponse, CurrentUser, PagePermissionsResponse
from paymirror.modules.auth.service import AuthService
from paymirror.modules.rbac.service import PermissionService
from paymirror.core.dependencies import get_auth_service, get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.get("/me", response_model=CurrentUser)
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Get current authenticated user"""
    return CurrentUser(**current_user)


@router.get("/permissions", response_model=PagePermissionsResponse)
async def get_my_permissions(
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
):
    """Pages the caller may see, granted to their role or to them directly (for frontend UI)."""
    pages = PermissionService(supabase).get_role_permissions(current_user["id"], current_user["role_id"])
    return PagePermissionsResponse(pages=pages)
