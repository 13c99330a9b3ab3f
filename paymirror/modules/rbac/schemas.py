from pydantic import BaseModel, Field
from typing import Optional, Any

# Field names match table columns; aliases are the JSON names clients use.


class PageCreate(BaseModel):
    pagename: Optional[str] = None
    pageurl: Optional[str] = Field(default=None, alias="pageUrl")
    group_name: Optional[str] = Field(default=None, alias="groupName")

    class Config:
        populate_by_name = True


class PageUpdate(BaseModel):
    pagename: Optional[str] = None
    pageurl: Optional[str] = Field(default=None, alias="pageUrl")
    group_name: Optional[str] = Field(default=None, alias="groupName")

    class Config:
        populate_by_name = True


class PageUpdateItem(PageUpdate):
    id: int


class PageResponse(BaseModel):
    id: int
    pagename: str
    pageurl: str = Field(alias="pageUrl")
    group_name: Optional[str] = Field(default=None, alias="groupName")

    class Config:
        populate_by_name = True
        from_attributes = True


class RolePageCreate(BaseModel):
    role_id: int = Field(alias="roleId")
    page_id: int = Field(alias="pageId")
    userid: Optional[int] = None
    isview: bool = Field(default=False, alias="isView")
    isadd: bool = Field(default=False, alias="isAdd")
    isedit: bool = Field(default=False, alias="isEdit")
    isdelete: bool = Field(default=False, alias="isDelete")
    isupdate: bool = Field(default=False, alias="isUpdate")
    filters: Optional[Any] = None

    class Config:
        populate_by_name = True


class RolePagePatch(BaseModel):
    isview: Optional[bool] = Field(default=None, alias="isView")
    isadd: Optional[bool] = Field(default=None, alias="isAdd")
    isedit: Optional[bool] = Field(default=None, alias="isEdit")
    isdelete: Optional[bool] = Field(default=None, alias="isDelete")
    isupdate: Optional[bool] = Field(default=None, alias="isUpdate")
    filters: Optional[Any] = None

    class Config:
        populate_by_name = True


class RolePagePatchItem(RolePagePatch):
    id: int


class RolePageResponse(BaseModel):
    id: int
    role_id: int = Field(alias="roleId")
    userid: Optional[int] = None
    page_id: int = Field(alias="pageId")
    isview: Optional[bool] = Field(default=False, alias="isView")
    isadd: Optional[bool] = Field(default=False, alias="isAdd")
    isedit: Optional[bool] = Field(default=False, alias="isEdit")
    isdelete: Optional[bool] = Field(default=False, alias="isDelete")
    isupdate: Optional[bool] = Field(default=False, alias="isUpdate")
    filters: Optional[Any] = None

    class Config:
        populate_by_name = True
        from_attributes = True


class DefaultAssignmentsRequest(BaseModel):
    userid: int
    role_id: int = Field(alias="roleId")

    class Config:
        populate_by_name = True


class UserPermissionResponse(BaseModel):
    """One assignment row of a user, flattened with its page"""
    id: int
    role_id: int = Field(alias="roleId")
    user_id: Optional[int] = Field(default=None, alias="userId")
    page_id: int = Field(alias="pageId")
    page_name: Optional[str] = Field(default=None, alias="pageName")
    page_url: Optional[str] = Field(default=None, alias="pageUrl")
    group_name: Optional[str] = Field(default=None, alias="groupName")
    isview: Optional[bool] = Field(default=False, alias="isView")
    isadd: Optional[bool] = Field(default=False, alias="isAdd")
    isedit: Optional[bool] = Field(default=False, alias="isEdit")
    isdelete: Optional[bool] = Field(default=False, alias="isDelete")
    isupdate: Optional[bool] = Field(default=False, alias="isUpdate")
    filters: Optional[Any] = None

    class Config:
        populate_by_name = True


class PagePermissionResponse(BaseModel):
    """A page with the flags granted on it; id is the page id"""
    id: int
    group_name: Optional[str] = Field(default=None, alias="groupName")
    pagename: str
    pageurl: str = Field(alias="pageUrl")
    isview: Optional[bool] = Field(default=False, alias="isView")
    isadd: Optional[bool] = Field(default=False, alias="isAdd")
    isedit: Optional[bool] = Field(default=False, alias="isEdit")
    isdelete: Optional[bool] = Field(default=False, alias="isDelete")
    isupdate: Optional[bool] = Field(default=False, alias="isUpdate")
    filters: Optional[Any] = None

    class Config:
        populate_by_name = True


class DeleteResponse(BaseModel):
    id: int
    deleted: bool = True
