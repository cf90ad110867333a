from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from deviflow.database import get_db
from deviflow.core.gate import GateContext, ResourceRef
from deviflow.crud.work_order import work_order as work_order_crud
from deviflow.dependencies import guard
from deviflow.models.tenant import Module
from deviflow.models.user import ADMIN_ROLES
from deviflow.schemas.work_order import WorkOrderCreate, WorkOrderUpdate, WorkOrderResponse
from deviflow.services.work_order import work_order_service

router = APIRouter()

work_order_ref = ResourceRef(work_order_crud, "work_order_id")

module_access = guard(module=Module.maintenance, host_bound=True)
work_order_access = guard(module=Module.maintenance, resource=work_order_ref, host_bound=True)
work_order_admin = guard(module=Module.maintenance, roles=ADMIN_ROLES, resource=work_order_ref, host_bound=True)


@router.get("/work-orders", response_model=List[WorkOrderResponse])
def get_work_orders(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_access)
):
    return work_order_service.get_work_orders(db, ctx.scope, skip=skip, limit=limit)


@router.post("/work-orders", response_model=WorkOrderResponse, status_code=status.HTTP_201_CREATED)
def create_work_order(
    work_order_data: WorkOrderCreate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_access)
):
    return work_order_service.create_work_order(db, ctx.scope, work_order_data)


@router.get("/work-orders/{work_order_id}", response_model=WorkOrderResponse)
def get_work_order(
    work_order_id: int,
    ctx: GateContext = Depends(work_order_access)
):
    return ctx.resource


@router.put("/work-orders/{work_order_id}", response_model=WorkOrderResponse)
def update_work_order(
    work_order_id: int,
    work_order_data: WorkOrderUpdate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(work_order_access)
):
    return work_order_service.update_work_order(db, ctx.scope, work_order_id, work_order_data)


@router.delete("/work-orders/{work_order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_work_order(
    work_order_id: int,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(work_order_admin)
):
    """Delete a work order. Requires admin or superadmin role."""
    work_order_service.delete_work_order(db, ctx.scope, work_order_id)
    return None
