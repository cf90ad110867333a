from .tenant import Tenant, Module
from .user import User, Role
from .checklist import Checklist, ChecklistCategory
from .work_order import WorkOrder, WorkOrderStatus
