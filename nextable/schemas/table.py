from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from nextable.models.restaurant import TableStatus


class TableRequest(BaseModel):
    restaurant_id: int
    number: int = Field(..., gt=0)
    capacity: int = Field(..., gt=0)
    location: Optional[str] = None
    notes: Optional[str] = None


class TableUpdateRequest(BaseModel):
    """Only the fields present in the request body are applied."""
    number: Optional[int] = Field(None, gt=0)
    status: Optional[TableStatus] = None
    capacity: Optional[int] = Field(None, gt=0)
    location: Optional[str] = None
    notes: Optional[str] = None


class TableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    restaurant_id: int
    number: int
    status: TableStatus
    capacity: int
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class RestaurantTablesResponse(BaseModel):
    restaurant_id: int
    tables: List[TableResponse]
