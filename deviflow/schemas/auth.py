from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from deviflow.schemas.user import UserBase, UserResponse


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RegisterRequest(UserBase):
    """Self-registration within the host tenant. The role is always `user`."""
    password: str = Field(..., min_length=8)


class TenantSummary(BaseModel):
    id: int
    name: str
    subdomain: str
    modules: List[str]

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
    tenant: TenantSummary


class MeResponse(BaseModel):
    user: UserResponse
    tenant: TenantSummary


class ModuleStatus(BaseModel):
    name: str
    display_name: str
    description: str
    enabled: bool


class ModulesResponse(BaseModel):
    tenant: TenantSummary
    modules: List[str]
    available_modules: List[ModuleStatus]
