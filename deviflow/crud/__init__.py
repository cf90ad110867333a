from deviflow.crud.base import CRUDBase
from .tenant import tenant
from .user import user
from .checklist import checklist, category
from .work_order import work_order

__all__ = ["CRUDBase", "tenant", "user", "checklist", "category", "work_order"]
