import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Enum
from deviflow.database import Base, TimestampMixin

class WorkOrderStatus(str, enum.Enum):
    open = "open"
    in_progress = "in_progress"
    done = "done"

class WorkOrder(Base, TimestampMixin):
    __tablename__ = "work_order"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(Enum(WorkOrderStatus, name="work_order_status"), nullable=False, default=WorkOrderStatus.open)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=True)
