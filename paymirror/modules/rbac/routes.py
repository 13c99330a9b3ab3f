from fastapi import APIRouter, Body, Depends, Query
from paymirror.database.supabase_client import get_supabase
from paymirror.core.dependencies import get_current_user
from paymirror.core.errors import NotFoundError
from paymirror.modules.rbac.bulk import parse_update_request
from paymirror.modules.rbac.schemas import (
    PageCreate, PageUpdate, PageUpdateItem, PageResponse,
    RolePageCreate, RolePagePatch, RolePagePatchItem, RolePageResponse,
    DefaultAssignmentsRequest, UserPermissionResponse, DeleteResponse
)
from paymirror.modules.rbac.service import PageService, RolePageService, PermissionService
from supabase import Client
from typing import Dict, List, Optional, Union

router = APIRouter(prefix="/rbac", tags=["rbac"])


def get_page_service(supabase: Client = Depends(get_supabase)) -> PageService:
    return PageService(supabase)


def get_role_page_service(supabase: Client = Depends(get_supabase)) -> RolePageService:
    return RolePageService(supabase)


def get_permission_service(supabase: Client = Depends(get_supabase)) -> PermissionService:
    return PermissionService(supabase)


# Page endpoints
@router.post("/pages", response_model=PageResponse, status_code=201)
async def create_page(
    page_data: PageCreate,
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service)
):
    """Create a new page"""
    return service.create_page(page_data)


@router.get("/pages", response_model=List[PageResponse])
async def list_pages(
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service)
):
    """List all pages ordered by name"""
    return service.get_all_pages()


@router.get("/pages/{page_id}", response_model=PageResponse)
async def get_page(
    page_id: int,
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service)
):
    """Get page by ID"""
    page = service.get_page_by_id(page_id)
    if page is None:
        raise NotFoundError("Page not found")
    return page


@router.put("/pages/{page_id}", response_model=Union[List[PageResponse], PageResponse])
async def update_page(
    page_id: str,
    page_data: Union[List[PageUpdateItem], PageUpdate] = Body(...),
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service)
):
    """Update one page, several ids ("1,2") sharing the body, or an array of {id, ...} items"""
    ids, data = parse_update_request(page_id, page_data, PageUpdateItem)
    return service.update_page(ids, data)


@router.delete("/pages/{page_id}", response_model=DeleteResponse)
async def delete_page(
    page_id: int,
    user_data: Dict = Depends(get_current_user),
    service: PageService = Depends(get_page_service)
):
    """Delete page; assignments pointing at it are left in place"""
    return service.delete_page(page_id)


# Role-page assignment endpoints
@router.post("/role-pages", response_model=Union[List[RolePageResponse], RolePageResponse], status_code=201)
async def assign_role_to_page(
    assignment_data: Union[List[RolePageCreate], RolePageCreate] = Body(...),
    user_data: Dict = Depends(get_current_user),
    service: RolePageService = Depends(get_role_page_service)
):
    """Assign a role (optionally narrowed to one user) to a page; body may be an object or an array"""
    return service.assign_role_to_page(assignment_data)


@router.post("/role-pages/defaults", response_model=List[RolePageResponse], status_code=201)
async def create_default_assignments(
    request: DefaultAssignmentsRequest,
    user_data: Dict = Depends(get_current_user),
    service: RolePageService = Depends(get_role_page_service)
):
    """Create an all-false assignment on every page for a newly onboarded user"""
    return service.create_default_assignments(request.userid, request.role_id)


@router.get("/role-pages", response_model=List[RolePageResponse])
async def list_role_page_assignments(
    role_id: Optional[int] = Query(default=None, alias="roleId"),
    page_id: Optional[int] = Query(default=None, alias="pageId"),
    user_data: Dict = Depends(get_current_user),
    service: RolePageService = Depends(get_role_page_service)
):
    """List assignments, optionally filtered by role and/or page"""
    return service.get_role_page_assignments(role_id=role_id, page_id=page_id)


@router.put("/role-pages/{assignment_id}", response_model=Union[List[RolePageResponse], RolePageResponse])
async def update_role_page_assignment(
    assignment_id: str,
    assignment_data: Union[List[RolePagePatchItem], RolePagePatch] = Body(...),
    user_data: Dict = Depends(get_current_user),
    service: RolePageService = Depends(get_role_page_service)
):
    """
    Update assignment flags.

    assignment_id may be one id or a comma-separated list ("3,4,5") sharing
    the body; an array body carries one id per item and ignores the path.
    """
    ids, data = parse_update_request(assignment_id, assignment_data, RolePagePatchItem)
    return service.update_role_page_assignment(ids, data)


@router.delete("/role-pages/{assignment_id}", response_model=DeleteResponse)
async def delete_role_page_assignment(
    assignment_id: int,
    user_data: Dict = Depends(get_current_user),
    service: RolePageService = Depends(get_role_page_service)
):
    """Delete assignment"""
    return service.delete_role_page_assignment(assignment_id)


# Effective permissions of the caller
@router.get("/user-permissions", response_model=List[UserPermissionResponse])
async def get_user_permissions(
    user_data: Dict = Depends(get_current_user),
    service: PermissionService = Depends(get_permission_service)
):
    """Current user's assignment rows joined to their pages"""
    return service.get_user_permissions(user_data["id"])


@router.put("/user-permissions", response_model=List[RolePageResponse])
async def update_user_permissions(
    permissions: List[RolePagePatchItem],
    user_data: Dict = Depends(get_current_user),
    service: PermissionService = Depends(get_permission_service)
):
    """Bulk update the current user's own assignment rows"""
    return service.update_user_permissions_bulk(user_data["id"], permissions)
