from pydantic import BaseModel
from typing import List, Literal, Optional

from dancey_portal.schemas.common_schema import Pagination


class AppUser(BaseModel):
    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    status: str
    created_at: Optional[str] = None


class AppUserListResponse(BaseModel):
    users: List[AppUser]
    pagination: Pagination


class AppUserStatusUpdate(BaseModel):
    status: Literal["active", "inactive"]
