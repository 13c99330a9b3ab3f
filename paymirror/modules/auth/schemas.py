from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from paymirror.modules.rbac.schemas import PagePermissionResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class CurrentUser(BaseModel):
    id: int
    email: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    role_id: int = Field(alias="roleId")
    role: Optional[str] = None

    class Config:
        populate_by_name = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: CurrentUser


class PagePermissionsResponse(BaseModel):
    pages: List[PagePermissionResponse]
