import re
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from deviflow.models.tenant import Module

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


class TenantBase(BaseModel):
    name: str = Field(..., min_length=1)
    modules: List[Module] = []

class TenantCreate(TenantBase):
    subdomain: str

    @field_validator("subdomain")
    @classmethod
    def valid_subdomain(cls, v: str) -> str:
        v = v.strip().lower()
        if not SUBDOMAIN_PATTERN.match(v):
            raise ValueError("subdomain must be a single DNS label (a-z, 0-9, '-')")
        return v

class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    modules: Optional[List[Module]] = None
    # Accepted only so that an attempted change can be refused explicitly
    subdomain: Optional[str] = None

class TenantResponse(BaseModel):
    id: int
    name: str
    subdomain: str
    modules: List[str]

    class Config:
        from_attributes = True
