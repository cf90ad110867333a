from pydantic import BaseModel, Field, field_validator
from typing import Optional
from deviflow.schemas.common import ScopedPayload, reject_null

class ChecklistBase(ScopedPayload):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_active: bool = True
    order: int = 0

class ChecklistCreate(ChecklistBase):
    pass

class ChecklistUpdate(ScopedPayload):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None

    @field_validator("name", "is_active", "order")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class ChecklistResponse(BaseModel):
    id: int
    tenant_id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    order: int
    created_by: Optional[int] = None

    class Config:
        from_attributes = True


class CategoryCreate(ScopedPayload):
    checklist_id: int
    name: str = Field(..., min_length=1)
    order: int = 0

class CategoryUpdate(ScopedPayload):
    name: Optional[str] = Field(None, min_length=1)
    order: Optional[int] = None

    @field_validator("name", "order")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class CategoryResponse(BaseModel):
    id: int
    tenant_id: int
    checklist_id: int
    name: str
    order: int

    class Config:
        from_attributes = True
