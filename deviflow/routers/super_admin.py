from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from deviflow.database import get_db
from deviflow.core.gate import GateContext
from deviflow.dependencies import guard
from deviflow.models.user import SUPERADMIN_ROLES
from deviflow.schemas.tenant import TenantCreate, TenantUpdate, TenantResponse
from deviflow.services.tenant import tenant_service

router = APIRouter()

superadmin_access = guard(roles=SUPERADMIN_ROLES)


@router.get("/tenants", response_model=List[TenantResponse])
def get_tenants(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _ctx: GateContext = Depends(superadmin_access)
):
    return tenant_service.get_tenants(db, skip=skip, limit=limit)


@router.post("/tenants", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    db: Session = Depends(get_db),
    _ctx: GateContext = Depends(superadmin_access)
):
    """
    Create a tenant.

    Raises:
        Conflict (409): If the subdomain is taken
    """
    return tenant_service.create_tenant(db, tenant_data)


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: int,
    db: Session = Depends(get_db),
    _ctx: GateContext = Depends(superadmin_access)
):
    return tenant_service.get_tenant(db, tenant_id)


@router.patch("/tenants/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: int,
    tenant_data: TenantUpdate,
    db: Session = Depends(get_db),
    _ctx: GateContext = Depends(superadmin_access)
):
    """
    Update a tenant's name or enabled modules.

    Raises:
        BadRequest (400): If the request tries to change the subdomain
    """
    return tenant_service.update_tenant(db, tenant_id, tenant_data)


@router.delete("/tenants/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant(
    tenant_id: int,
    db: Session = Depends(get_db),
    _ctx: GateContext = Depends(superadmin_access)
):
    """
    Delete a tenant.

    Raises:
        Conflict (409): If the tenant still has users or data
    """
    tenant_service.delete_tenant(db, tenant_id)
    return None
