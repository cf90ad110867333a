from deviflow.crud.base import CRUDBase
from deviflow.models.work_order import WorkOrder
from deviflow.schemas.work_order import WorkOrderCreate, WorkOrderUpdate


class CRUDWorkOrder(CRUDBase[WorkOrder, WorkOrderCreate, WorkOrderUpdate]):
    """
    CRUD operations for WorkOrder model.

    Inherits all standard CRUD operations from CRUDBase.
    """


# Create a singleton instance
work_order = CRUDWorkOrder(WorkOrder)
