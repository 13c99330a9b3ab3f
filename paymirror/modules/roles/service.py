import logging
from supabase import Client
from postgrest.exceptions import APIError
from paymirror.core.errors import ValidationError, NotFoundError, ConflictError, raise_for_store_error
from paymirror.modules.rbac.schemas import DeleteResponse
from paymirror.modules.roles.schemas import RoleCreate, RoleUpdate, RoleResponse
from typing import List

logger = logging.getLogger(__name__)


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _require_name(name) -> str:
        if not name or not name.strip():
            raise ValidationError("Role name is required.")
        return name.strip()

    def create_role(self, role_data: RoleCreate) -> RoleResponse:
        """Create a new role"""
        name = self._require_name(role_data.name)
        try:
            result = self.supabase.table("roles").insert({"name": name}).execute()
        except APIError as e:
            raise_for_store_error(e, "Role")

        logger.info(f"Created role '{name}'")
        return RoleResponse(**result.data[0])

    def get_roles(self) -> List[RoleResponse]:
        """List all roles ordered by name"""
        result = self.supabase.table("roles")\
            .select("*")\
            .order("name")\
            .execute()
        return [RoleResponse(**role) for role in result.data]

    def get_role_by_id(self, role_id: int) -> RoleResponse:
        """Get role by ID"""
        result = self.supabase.table("roles")\
            .select("*")\
            .eq("id", role_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError(f"Role with ID {role_id} not found.")

        return RoleResponse(**result.data[0])

    def update_role(self, role_id: int, role_data: RoleUpdate) -> RoleResponse:
        """Rename a role"""
        name = self._require_name(role_data.name)
        try:
            result = self.supabase.table("roles")\
                .update({"name": name})\
                .eq("id", role_id)\
                .execute()
        except APIError as e:
            raise_for_store_error(e, "Role")

        if not result.data:
            raise NotFoundError(f"Role with ID {role_id} not found.")

        return RoleResponse(**result.data[0])

    def delete_role(self, role_id: int) -> DeleteResponse:
        """Delete a role; refused while any user holds it"""
        users_with_role = self.supabase.table("users")\
            .select("id", count="exact")\
            .eq("role_id", role_id)\
            .execute()
        user_count = users_with_role.count or 0
        if user_count > 0:
            raise ConflictError(f"Cannot delete role. It is currently assigned to {user_count} user(s).")

        try:
            result = self.supabase.table("roles")\
                .delete()\
                .eq("id", role_id)\
                .execute()
        except APIError as e:
            raise_for_store_error(e, "Role")

        if not result.data:
            raise NotFoundError(f"Role with ID {role_id} not found.")

        logger.info(f"Deleted role {role_id}")
        return DeleteResponse(id=role_id, deleted=True)
