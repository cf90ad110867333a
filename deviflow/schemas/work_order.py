from pydantic import BaseModel, Field, field_validator
from typing import Optional
from deviflow.models.work_order import WorkOrderStatus
from deviflow.schemas.common import ScopedPayload, reject_null

class WorkOrderCreate(ScopedPayload):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: WorkOrderStatus = WorkOrderStatus.open

class WorkOrderUpdate(ScopedPayload):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[WorkOrderStatus] = None

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)

class WorkOrderResponse(BaseModel):
    id: int
    tenant_id: int
    title: str
    description: Optional[str] = None
    status: WorkOrderStatus
    created_by: Optional[int] = None

    class Config:
        from_attributes = True
