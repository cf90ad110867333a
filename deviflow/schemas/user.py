from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from deviflow.models.user import Role
from deviflow.schemas.common import ScopedPayload, reject_null


class UserBase(ScopedPayload):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

class UserCreate(UserBase):
    password: str = Field(..., min_length=8)
    role: Role = Role.user
    is_active: bool = True

class UserUpdate(ScopedPayload):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=8)

    @field_validator("role", "is_active", "password")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class UserResponse(BaseModel):
    id: int
    tenant_id: int
    email: str
    role: Role
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True
