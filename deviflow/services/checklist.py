from typing import List
from sqlalchemy.orm import Session
from deviflow.core.exceptions import ResourceNotFound
from deviflow.core.tenant_context import TenantScope
from deviflow.crud.checklist import checklist as checklist_crud, category as category_crud
from deviflow.models.checklist import Checklist, ChecklistCategory
from deviflow.schemas.checklist import ChecklistCreate, ChecklistUpdate, CategoryCreate, CategoryUpdate


class ChecklistService:
    """
    Service layer for checklists and their categories.

    Records are always looked up through the caller's scope, so a record from
    another tenant is indistinguishable from a missing one.
    """

    def __init__(self):
        self.crud = checklist_crud
        self.categories = category_crud

    def get_checklists(
        self,
        db: Session,
        scope: TenantScope,
        active_only: bool = False,
        skip: int = 0,
        limit: int = 100
    ) -> List[Checklist]:
        if active_only:
            return self.crud.get_active(db, scope)
        return self.crud.get_multi(db, scope, skip=skip, limit=limit)

    def create_checklist(self, db: Session, scope: TenantScope, checklist_data: ChecklistCreate) -> Checklist:
        data = checklist_data.model_dump()
        data["created_by"] = scope.user_id
        return self.crud.create(db, scope, obj_in=data)

    def update_checklist(
        self,
        db: Session,
        scope: TenantScope,
        checklist_id: int,
        checklist_data: ChecklistUpdate
    ) -> Checklist:
        checklist = self.crud.update(db, scope, checklist_id, obj_in=checklist_data)
        if not checklist:
            raise ResourceNotFound()
        return checklist

    def delete_checklist(self, db: Session, scope: TenantScope, checklist_id: int) -> None:
        if not self.crud.delete(db, scope, checklist_id):
            raise ResourceNotFound()

    def get_categories(self, db: Session, scope: TenantScope, checklist_id: int) -> List[ChecklistCategory]:
        return self.categories.get_by_checklist(db, scope, checklist_id)

    def create_category(self, db: Session, scope: TenantScope, category_data: CategoryCreate) -> ChecklistCategory:
        """
        Create a category under a checklist of the caller's tenant.

        Raises:
            ResourceNotFound: If the referenced checklist is not in the tenant
        """
        if not self.crud.get(db, scope, category_data.checklist_id):
            raise ResourceNotFound()
        return self.categories.create(db, scope, obj_in=category_data)

    def update_category(
        self,
        db: Session,
        scope: TenantScope,
        category_id: int,
        category_data: CategoryUpdate
    ) -> ChecklistCategory:
        category = self.categories.update(db, scope, category_id, obj_in=category_data)
        if not category:
            raise ResourceNotFound()
        return category

    def delete_category(self, db: Session, scope: TenantScope, category_id: int) -> None:
        if not self.categories.delete(db, scope, category_id):
            raise ResourceNotFound()


# Create a singleton instance
checklist_service = ChecklistService()
