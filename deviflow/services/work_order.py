from typing import List
from sqlalchemy.orm import Session
from deviflow.core.exceptions import ResourceNotFound
from deviflow.core.tenant_context import TenantScope
from deviflow.crud.work_order import work_order as work_order_crud
from deviflow.models.work_order import WorkOrder
from deviflow.schemas.work_order import WorkOrderCreate, WorkOrderUpdate


class WorkOrderService:
    """
    Service layer for maintenance work orders.
    """

    def __init__(self):
        self.crud = work_order_crud

    def get_work_orders(self, db: Session, scope: TenantScope, skip: int = 0, limit: int = 100) -> List[WorkOrder]:
        return self.crud.get_multi(db, scope, skip=skip, limit=limit)

    def create_work_order(self, db: Session, scope: TenantScope, work_order_data: WorkOrderCreate) -> WorkOrder:
        data = work_order_data.model_dump()
        data["created_by"] = scope.user_id
        return self.crud.create(db, scope, obj_in=data)

    def update_work_order(
        self,
        db: Session,
        scope: TenantScope,
        work_order_id: int,
        work_order_data: WorkOrderUpdate
    ) -> WorkOrder:
        work_order = self.crud.update(db, scope, work_order_id, obj_in=work_order_data)
        if not work_order:
            raise ResourceNotFound()
        return work_order

    def delete_work_order(self, db: Session, scope: TenantScope, work_order_id: int) -> None:
        if not self.crud.delete(db, scope, work_order_id):
            raise ResourceNotFound()


# Create a singleton instance
work_order_service = WorkOrderService()
