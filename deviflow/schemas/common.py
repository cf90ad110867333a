from typing import Any
from pydantic import BaseModel, ConfigDict


class ScopedPayload(BaseModel):
    """
    Base for request bodies that write tenant-owned data.

    Payloads never declare a tenant field and unknown keys are ignored, so a
    `tenantId` or `tenant_id` sent by the client is dropped before it reaches
    the CRUD layer.
    """
    model_config = ConfigDict(extra="ignore")


def reject_null(v: Any) -> Any:
    """
    Validator for optional update fields backed by NOT NULL columns.

    Leaving the field out keeps the stored value; an explicit null is refused.
    """
    if v is None:
        raise ValueError("may not be null")
    return v


class MessageResponse(BaseModel):
    message: str
