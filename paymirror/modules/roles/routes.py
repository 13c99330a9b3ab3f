from fastapi import APIRouter, Depends
from paymirror.database.supabase_client import get_supabase
from paymirror.core.dependencies import get_current_user, require_admin
from paymirror.modules.rbac.schemas import DeleteResponse
from paymirror.modules.roles.schemas import RoleCreate, RoleUpdate, RoleResponse
from paymirror.modules.roles.service import RoleService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_supabase)) -> RoleService:
    return RoleService(supabase)


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    role_data: RoleCreate,
    user_data: Dict = Depends(require_admin),
    service: RoleService = Depends(get_role_service)
):
    """Create a new role (admin only)"""
    return service.create_role(role_data)


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    user_data: Dict = Depends(get_current_user),
    service: RoleService = Depends(get_role_service)
):
    """List all roles"""
    return service.get_roles()


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    user_data: Dict = Depends(get_current_user),
    service: RoleService = Depends(get_role_service)
):
    """Get role by ID"""
    return service.get_role_by_id(role_id)


@router.put("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: int,
    role_data: RoleUpdate,
    user_data: Dict = Depends(require_admin),
    service: RoleService = Depends(get_role_service)
):
    """Rename a role (admin only)"""
    return service.update_role(role_id, role_data)


@router.delete("/{role_id}", response_model=DeleteResponse)
async def delete_role(
    role_id: int,
    user_data: Dict = Depends(require_admin),
    service: RoleService = Depends(get_role_service)
):
    """Delete a role (admin only); fails while users still hold it"""
    return service.delete_role(role_id)
