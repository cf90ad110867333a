from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from deviflow.database import get_db
from deviflow.core.gate import GateContext, ResourceRef
from deviflow.core.logging_config import logger
from deviflow.crud.checklist import checklist as checklist_crud, category as category_crud
from deviflow.dependencies import guard
from deviflow.models.tenant import Module
from deviflow.models.user import ADMIN_ROLES
from deviflow.schemas.checklist import (
    ChecklistCreate, ChecklistUpdate, ChecklistResponse,
    CategoryCreate, CategoryUpdate, CategoryResponse
)
from deviflow.services.checklist import checklist_service

router = APIRouter()

checklist_ref = ResourceRef(checklist_crud, "checklist_id")
category_ref = ResourceRef(category_crud, "category_id")

module_access = guard(module=Module.checklists, host_bound=True)
module_admin = guard(module=Module.checklists, roles=ADMIN_ROLES, host_bound=True)
checklist_access = guard(module=Module.checklists, resource=checklist_ref, host_bound=True)
checklist_admin = guard(module=Module.checklists, roles=ADMIN_ROLES, resource=checklist_ref, host_bound=True)
category_admin = guard(module=Module.checklists, roles=ADMIN_ROLES, resource=category_ref, host_bound=True)


# === CHECKLISTS ===

@router.get("/checklists", response_model=List[ChecklistResponse])
def get_checklists(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_access)
):
    """
    Retrieve all checklists for your tenant.

    Args:
        skip: Number of records to skip (default: 0)
        limit: Maximum number of records to return (default: 100)
        db: Database session
        ctx: Gate context (tenant from JWT)

    Returns:
        List of checklists belonging to your tenant
    """
    return checklist_service.get_checklists(db, ctx.scope, skip=skip, limit=limit)


@router.get("/checklists/active", response_model=List[ChecklistResponse])
def get_active_checklists(
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_access)
):
    return checklist_service.get_checklists(db, ctx.scope, active_only=True)


@router.get("/checklists/{checklist_id}", response_model=ChecklistResponse)
def get_checklist(
    checklist_id: int,
    ctx: GateContext = Depends(checklist_access)
):
    """
    Retrieve a checklist by ID.

    Raises:
        ResourceNotFound (404): If the checklist is missing or owned by another tenant
    """
    return ctx.resource


@router.post("/checklists", response_model=ChecklistResponse, status_code=status.HTTP_201_CREATED)
def create_checklist(
    checklist_data: ChecklistCreate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_admin)
):
    """
    Create a new checklist.

    The tenant is automatically identified from the JWT token.
    """
    logger.info(f"Creating checklist: name={checklist_data.name}, tenant_id={ctx.scope.tenant_id}")
    result = checklist_service.create_checklist(db, ctx.scope, checklist_data)
    logger.info(f"Checklist created successfully: id={result.id}")
    return result


@router.put("/checklists/{checklist_id}", response_model=ChecklistResponse)
def update_checklist(
    checklist_id: int,
    checklist_data: ChecklistUpdate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(checklist_admin)
):
    return checklist_service.update_checklist(db, ctx.scope, checklist_id, checklist_data)


@router.delete("/checklists/{checklist_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_checklist(
    checklist_id: int,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(checklist_admin)
):
    checklist_service.delete_checklist(db, ctx.scope, checklist_id)
    return None


# === CATEGORIES ===

@router.get("/checklists/{checklist_id}/categories", response_model=List[CategoryResponse])
def get_categories(
    checklist_id: int,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(checklist_access)
):
    return checklist_service.get_categories(db, ctx.scope, checklist_id)


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(module_admin)
):
    """
    Create a category under one of your tenant's checklists.

    Raises:
        ResourceNotFound (404): If checklist_id is not a checklist of your tenant
    """
    return checklist_service.create_category(db, ctx.scope, category_data)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(category_admin)
):
    return checklist_service.update_category(db, ctx.scope, category_id, category_data)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(category_admin)
):
    checklist_service.delete_category(db, ctx.scope, category_id)
    return None
