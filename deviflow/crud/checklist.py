from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import delete
from deviflow.crud.base import CRUDBase
from deviflow.models.checklist import Checklist, ChecklistCategory
from deviflow.schemas.checklist import (
    ChecklistCreate, ChecklistUpdate, CategoryCreate, CategoryUpdate
)
from deviflow.core.tenant_context import TenantScope, require_scope


class CRUDChecklist(CRUDBase[Checklist, ChecklistCreate, ChecklistUpdate]):
    """
    CRUD operations for Checklist model.
    """

    def get_active(self, db: Session, scope: TenantScope) -> List[Checklist]:
        stmt = self.scoped(scope).where(Checklist.is_active.is_(True)).order_by(Checklist.order, Checklist.id)
        return list(db.execute(stmt).scalars().all())

    def delete(self, db: Session, scope: TenantScope, id: int) -> bool:
        """Delete a checklist and its categories, both restricted to the tenant."""
        require_scope(scope)
        db.execute(
            delete(ChecklistCategory).where(
                ChecklistCategory.tenant_id == scope.tenant_id,
                ChecklistCategory.checklist_id == id
            )
        )
        return super().delete(db, scope, id)


class CRUDCategory(CRUDBase[ChecklistCategory, CategoryCreate, CategoryUpdate]):
    """
    CRUD operations for ChecklistCategory model.
    """

    def get_by_checklist(self, db: Session, scope: TenantScope, checklist_id: int) -> List[ChecklistCategory]:
        stmt = self.scoped(scope).where(
            ChecklistCategory.checklist_id == checklist_id
        ).order_by(ChecklistCategory.order, ChecklistCategory.id)
        return list(db.execute(stmt).scalars().all())


# Create singleton instances
checklist = CRUDChecklist(Checklist)
category = CRUDCategory(ChecklistCategory)
