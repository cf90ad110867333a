from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, exists
from deviflow.models.tenant import Tenant
from deviflow.models.user import User
from deviflow.models.checklist import Checklist, ChecklistCategory
from deviflow.models.work_order import WorkOrder
from deviflow.schemas.tenant import TenantCreate, TenantUpdate

# Tables that reference tenant.id; a tenant with rows in any of them cannot be deleted
DEPENDENT_MODELS = (User, Checklist, ChecklistCategory, WorkOrder)


class CRUDTenant:
    """
    CRUD operations for Tenant model.

    Note: Tenant model doesn't have tenant_id (it IS the tenant),
    so we don't inherit from CRUDBase. These operations are reserved for
    tenant resolution and superadmin management.
    """

    def __init__(self):
        self.model = Tenant

    def get(self, db: Session, tenant_id: int) -> Optional[Tenant]:
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        return db.execute(stmt).scalar_one_or_none()

    def get_by_subdomain(self, db: Session, subdomain: str) -> Optional[Tenant]:
        """
        Retrieve a tenant by its subdomain.

        Args:
            db: Database session
            subdomain: Lower-case subdomain label

        Returns:
            Tenant instance or None if not found
        """
        stmt = select(Tenant).where(Tenant.subdomain == subdomain.lower())
        return db.execute(stmt).scalar_one_or_none()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Tenant]:
        stmt = select(Tenant).order_by(Tenant.id).offset(skip).limit(limit)
        return list(db.execute(stmt).scalars().all())

    def create(self, db: Session, *, obj_in: TenantCreate) -> Tenant:
        """
        Create a tenant.

        Raises:
            ValueError: If the subdomain is already taken
        """
        tenant = Tenant(
            name=obj_in.name,
            subdomain=obj_in.subdomain,
            modules=sorted({m.value for m in obj_in.modules}),
        )
        db.add(tenant)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValueError(f"Subdomain {obj_in.subdomain} already exists")
        db.refresh(tenant)
        return tenant

    def update(self, db: Session, *, db_obj: Tenant, obj_in: TenantUpdate) -> Tenant:
        """Update name and module set. The subdomain is never changed here."""
        update_data = obj_in.model_dump(exclude_unset=True, exclude={"subdomain"})
        if "name" in update_data and update_data["name"] is not None:
            db_obj.name = update_data["name"]
        if "modules" in update_data and update_data["modules"] is not None:
            db_obj.modules = sorted({m.value for m in obj_in.modules})
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def has_dependents(self, db: Session, tenant_id: int) -> bool:
        for model in DEPENDENT_MODELS:
            stmt = select(exists().where(model.tenant_id == tenant_id))
            if db.execute(stmt).scalar():
                return True
        return False

    def delete(self, db: Session, *, db_obj: Tenant) -> None:
        db.delete(db_obj)
        db.commit()


# Create singleton instance
tenant = CRUDTenant()
