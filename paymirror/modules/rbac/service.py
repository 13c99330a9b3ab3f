import logging
from supabase import Client
from postgrest.exceptions import APIError
from paymirror.config.settings import settings
from paymirror.core.errors import ValidationError, NotFoundError, raise_for_store_error
from paymirror.modules.rbac.bulk import Ids, apply_patches, to_pairs
from paymirror.modules.rbac.schemas import (
    PageCreate, PageUpdate, PageUpdateItem, PageResponse,
    RolePageCreate, RolePagePatch, RolePagePatchItem, RolePageResponse,
    UserPermissionResponse, PagePermissionResponse, DeleteResponse
)
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

PAGES_TABLE = "rback_pages"
ROLE_PAGES_TABLE = "rback_roles_pages"


def fetch_pages_by_id(supabase: Client, page_ids: Iterable[int]) -> Dict[int, Dict[str, Any]]:
    """Load pages for a set of ids in one request"""
    page_ids = sorted({pid for pid in page_ids if pid is not None})
    if not page_ids:
        return {}
    result = supabase.table(PAGES_TABLE)\
        .select("id, pagename, pageurl, group_name")\
        .in_("id", page_ids)\
        .execute()
    return {page["id"]: page for page in (result.data or [])}


class PageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_page(self, page_data: Union[PageCreate, List[PageCreate]]) -> Union[PageResponse, List[PageResponse]]:
        """Create a page, or several in one insert when given a list"""
        items = page_data if isinstance(page_data, list) else [page_data]
        rows = []
        for item in items:
            if not (item.pagename or "").strip() or not (item.pageurl or "").strip():
                raise ValidationError("pagename and pageUrl are required")
            rows.append({
                "pagename": item.pagename,
                "pageurl": item.pageurl,
                "group_name": item.group_name or settings.default_page_group
            })
        if not rows:
            return []

        try:
            result = self.supabase.table(PAGES_TABLE).insert(rows).execute()
        except APIError as e:
            raise_for_store_error(e, "Page")

        pages = [PageResponse(**page) for page in result.data]
        logger.info(f"Created {len(pages)} page(s)")
        if isinstance(page_data, list):
            return pages
        return pages[0]

    def get_all_pages(self) -> List[PageResponse]:
        """List every page ordered by name"""
        result = self.supabase.table(PAGES_TABLE)\
            .select("*")\
            .order("pagename")\
            .execute()
        return [PageResponse(**page) for page in result.data]

    def get_page_by_id(self, page_id: int) -> Optional[PageResponse]:
        """Get page by ID; None when missing"""
        result = self.supabase.table(PAGES_TABLE)\
            .select("*")\
            .eq("id", page_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return PageResponse(**result.data[0])

    def update_page(
        self,
        page_id: Ids,
        page_data: Union[PageUpdate, List[PageUpdateItem]]
    ) -> Union[PageResponse, List[PageResponse]]:
        """Update one page, or many when both arguments are lists"""
        is_bulk, pairs = to_pairs(page_id, page_data)
        try:
            rows = apply_patches(self.supabase, PAGES_TABLE, pairs)
        except APIError as e:
            raise_for_store_error(e, "Page")

        pages = [PageResponse(**row) for row in rows]
        if is_bulk:
            logger.info(f"Bulk page update: {len(pages)}/{len(pairs)} row(s) matched")
            return pages
        if not pages:
            raise NotFoundError("Page not found")
        return pages[0]

    def delete_page(self, page_id: int) -> DeleteResponse:
        """Delete page; reports deleted even when nothing matched"""
        self.supabase.table(PAGES_TABLE)\
            .delete()\
            .eq("id", page_id)\
            .execute()
        logger.info(f"Deleted page {page_id}")
        return DeleteResponse(id=page_id, deleted=True)


class RolePageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def assign_role_to_page(
        self,
        assignment_data: Union[RolePageCreate, List[RolePageCreate]]
    ) -> Union[RolePageResponse, List[RolePageResponse]]:
        """Insert one or many assignment rows; duplicates are allowed"""
        items = assignment_data if isinstance(assignment_data, list) else [assignment_data]
        if not items:
            return []
        rows = [item.model_dump() for item in items]

        try:
            result = self.supabase.table(ROLE_PAGES_TABLE).insert(rows).execute()
        except APIError as e:
            raise_for_store_error(e, "Assignment")

        assignments = [RolePageResponse(**row) for row in result.data]
        logger.info(f"Created {len(assignments)} role-page assignment(s)")
        if isinstance(assignment_data, list):
            return assignments
        return assignments[0]

    def get_role_page_assignments(
        self,
        role_id: Optional[int] = None,
        page_id: Optional[int] = None
    ) -> List[RolePageResponse]:
        """List assignments filtered by whichever of role_id / page_id is given"""
        query = self.supabase.table(ROLE_PAGES_TABLE).select("*")
        if role_id is not None:
            query = query.eq("role_id", role_id)
        if page_id is not None:
            query = query.eq("page_id", page_id)
        result = query.order("id").execute()
        return [RolePageResponse(**row) for row in result.data]

    def update_role_page_assignment(
        self,
        assignment_id: Ids,
        assignment_data: Union[RolePagePatch, List[RolePagePatchItem]]
    ) -> Union[RolePageResponse, List[RolePageResponse]]:
        """Update one assignment, or many when both arguments are lists"""
        is_bulk, pairs = to_pairs(assignment_id, assignment_data)
        try:
            rows = apply_patches(self.supabase, ROLE_PAGES_TABLE, pairs)
        except APIError as e:
            raise_for_store_error(e, "Assignment")

        assignments = [RolePageResponse(**row) for row in rows]
        if is_bulk:
            logger.info(f"Bulk assignment update: {len(assignments)}/{len(pairs)} row(s) matched")
            return assignments
        if not assignments:
            raise NotFoundError("Assignment not found")
        return assignments[0]

    def delete_role_page_assignment(self, assignment_id: int) -> DeleteResponse:
        """Delete assignment; reports deleted even when nothing matched"""
        self.supabase.table(ROLE_PAGES_TABLE)\
            .delete()\
            .eq("id", assignment_id)\
            .execute()
        logger.info(f"Deleted role-page assignment {assignment_id}")
        return DeleteResponse(id=assignment_id, deleted=True)

    def create_default_assignments(self, user_id: int, role_id: int) -> List[RolePageResponse]:
        """Give a user one all-false assignment per existing page"""
        pages = self.supabase.table(PAGES_TABLE).select("id").order("id").execute()
        rows = [
            RolePageCreate(role_id=role_id, page_id=page["id"], userid=user_id).model_dump()
            for page in (pages.data or [])
        ]
        if not rows:
            return []

        try:
            result = self.supabase.table(ROLE_PAGES_TABLE).insert(rows).execute()
        except APIError as e:
            raise_for_store_error(e, "Assignment")

        logger.info(f"Created {len(result.data)} default assignment(s) for user {user_id}")
        return [RolePageResponse(**row) for row in result.data]


class PermissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_permissions(self, user_id: int) -> List[UserPermissionResponse]:
        """
        Assignment rows scoped to this user, left-joined to their pages.

        Only rows whose userid equals user_id are returned; role-wide rows
        (userid null) are not resolved here. Rows pointing at a deleted page
        come back with null page fields.
        """
        result = self.supabase.table(ROLE_PAGES_TABLE)\
            .select("*")\
            .eq("userid", user_id)\
            .order("id")\
            .execute()
        rows = result.data or []
        pages = fetch_pages_by_id(self.supabase, (row["page_id"] for row in rows))

        permissions = []
        for row in rows:
            page = pages.get(row["page_id"], {})
            permissions.append(UserPermissionResponse(
                id=row["id"],
                role_id=row["role_id"],
                user_id=row.get("userid"),
                page_id=row["page_id"],
                page_name=page.get("pagename"),
                page_url=page.get("pageurl"),
                group_name=page.get("group_name"),
                isview=row.get("isview"),
                isadd=row.get("isadd"),
                isedit=row.get("isedit"),
                isdelete=row.get("isdelete"),
                isupdate=row.get("isupdate"),
                filters=row.get("filters")
            ))
        return permissions

    def update_user_permissions_bulk(self, user_id: int, permissions: List[RolePagePatchItem]) -> List[RolePageResponse]:
        """
        Patch the caller's own assignment rows.

        Every write is additionally filtered on userid, so ids belonging to
        other users match nothing and are left out of the result.
        """
        _, pairs = to_pairs([p.id for p in permissions], permissions)
        try:
            rows = apply_patches(self.supabase, ROLE_PAGES_TABLE, pairs, scope={"userid": user_id})
        except APIError as e:
            raise_for_store_error(e, "Assignment")
        if len(rows) < len(pairs):
            logger.info(f"User {user_id} bulk permission update: {len(pairs) - len(rows)} id(s) not owned or missing")
        return [RolePageResponse(**row) for row in rows]

    def get_role_permissions(self, user_id: int, role_id: int) -> List[PagePermissionResponse]:
        """Pages granted role-wide to role_id or directly to user_id"""
        role_rows = self.supabase.table(ROLE_PAGES_TABLE)\
            .select("*")\
            .eq("role_id", role_id)\
            .is_("userid", "null")\
            .execute()
        user_rows = self.supabase.table(ROLE_PAGES_TABLE)\
            .select("*")\
            .eq("userid", user_id)\
            .execute()

        rows = {}
        for row in (role_rows.data or []) + (user_rows.data or []):
            rows[row["id"]] = row
        pages = fetch_pages_by_id(self.supabase, (row["page_id"] for row in rows.values()))

        permissions = []
        for row_id in sorted(rows):
            row = rows[row_id]
            page = pages.get(row["page_id"])
            if page is None:
                continue
            permissions.append(PagePermissionResponse(
                id=page["id"],
                group_name=page.get("group_name"),
                pagename=page["pagename"],
                pageurl=page["pageurl"],
                isview=row.get("isview"),
                isadd=row.get("isadd"),
                isedit=row.get("isedit"),
                isdelete=row.get("isdelete"),
                isupdate=row.get("isupdate"),
                filters=row.get("filters")
            ))
        return permissions
