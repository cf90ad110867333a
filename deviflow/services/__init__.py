from deviflow.services.auth import auth_service
from deviflow.services.tenant import tenant_service
from .user import user_service
from .checklist import checklist_service
from .work_order import work_order_service

__all__ = ["auth_service", "tenant_service", "user_service", "checklist_service", "work_order_service"]
