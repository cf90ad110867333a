from typing import List
from sqlalchemy.orm import Session
from deviflow.core.exceptions import BadRequest, Conflict, TenantNotFound
from deviflow.core.logging_config import logger
from deviflow.crud.tenant import tenant as tenant_crud
from deviflow.models.tenant import Tenant
from deviflow.schemas.tenant import TenantCreate, TenantUpdate


class TenantService:
    """
    Superadmin tenant management.

    Subdomains are immutable once assigned, and a tenant that still owns
    users or data cannot be deleted.
    """

    def __init__(self):
        self.crud = tenant_crud

    def get_tenant(self, db: Session, tenant_id: int) -> Tenant:
        tenant = self.crud.get(db, tenant_id)
        if not tenant:
            raise TenantNotFound()
        return tenant

    def get_tenants(self, db: Session, skip: int = 0, limit: int = 100) -> List[Tenant]:
        return self.crud.get_multi(db, skip=skip, limit=limit)

    def create_tenant(self, db: Session, tenant_data: TenantCreate) -> Tenant:
        if self.crud.get_by_subdomain(db, tenant_data.subdomain):
            raise Conflict("Subdomain already exists")
        try:
            tenant = self.crud.create(db, obj_in=tenant_data)
        except ValueError:
            raise Conflict("Subdomain already exists")
        logger.info(f"Tenant created: id={tenant.id} subdomain={tenant.subdomain}")
        return tenant

    def update_tenant(self, db: Session, tenant_id: int, tenant_data: TenantUpdate) -> Tenant:
        """
        Update a tenant's name or module set.

        Raises:
            TenantNotFound: If the tenant does not exist
            BadRequest: If the update tries to change the subdomain
        """
        tenant = self.get_tenant(db, tenant_id)
        if tenant_data.subdomain is not None and tenant_data.subdomain.strip().lower() != tenant.subdomain:
            raise BadRequest("Subdomain cannot be changed")
        tenant = self.crud.update(db, db_obj=tenant, obj_in=tenant_data)
        logger.info(f"Tenant updated: id={tenant.id} modules={tenant.modules}")
        return tenant

    def delete_tenant(self, db: Session, tenant_id: int) -> None:
        tenant = self.get_tenant(db, tenant_id)
        if self.crud.has_dependents(db, tenant.id):
            raise Conflict("Tenant still has users or data and cannot be deleted")
        self.crud.delete(db, db_obj=tenant)
        logger.info(f"Tenant deleted: id={tenant_id}")


# Create a singleton instance
tenant_service = TenantService()
