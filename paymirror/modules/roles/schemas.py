from pydantic import BaseModel
from typing import Optional


class RoleCreate(BaseModel):
    name: Optional[str] = None


class RoleUpdate(BaseModel):
    name: Optional[str] = None


class RoleResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
