from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from nextable.models.restaurant import AssignmentRole


class RestaurantRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the restaurant.")
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None


class RestaurantUpdateRequest(BaseModel):
    """Only the fields present in the request body are applied."""
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    owner_id: Optional[int] = None
    assignment_role: Optional[AssignmentRole] = None
    created_at: Optional[datetime] = None


class StaffAssignRequest(BaseModel):
    email: EmailStr = Field(..., description="Email of the user being assigned.")
    assignment_role: AssignmentRole


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email: Optional[str] = None
    assignment_role: AssignmentRole
    is_active: bool
