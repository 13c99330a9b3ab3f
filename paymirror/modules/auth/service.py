import logging
from supabase import Client
from paymirror.modules.auth.schemas import LoginRequest, TokenResponse, CurrentUser
from paymirror.core.errors import UnauthorizedError
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth and attach the local profile"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            logger.warning(f"Login failed for {login_data.email}: {e}")
            raise UnauthorizedError("Invalid email or password")

        if not auth_response.user or not auth_response.session:
            raise UnauthorizedError("Invalid email or password")

        # Store errors past this point propagate unchanged
        user_data = self.get_local_user(auth_response.user.email or login_data.email)
        if not user_data:
            raise UnauthorizedError("User not found")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user=CurrentUser(**user_data)
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to the local user row (with role name)"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise UnauthorizedError("Invalid or expired token")
            raise UnauthorizedError("Authentication failed")

        if not user_response or not user_response.user:
            raise UnauthorizedError("Invalid or expired token")

        user_data = self.get_local_user(user_response.user.email)
        if not user_data:
            raise UnauthorizedError("Unauthorized")
        return user_data

    def get_local_user(self, email: Optional[str]) -> Optional[Dict[str, Any]]:
        """Look up the users row by email and resolve its role name"""
        if not email:
            return None
        result = self.supabase.table("users")\
            .select("id, email, first_name, last_name, role_id")\
            .eq("email", email)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        user = result.data[0]

        role_result = self.supabase.table("roles")\
            .select("name")\
            .eq("id", user["role_id"])\
            .limit(1)\
            .execute()
        # Inner join semantics: a user whose role row is gone is not authenticated
        if not role_result.data:
            return None

        return {**user, "role": role_result.data[0]["name"]}
