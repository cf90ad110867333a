from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from deviflow.database import get_db
from deviflow.core.gate import GateContext, ResourceRef
from deviflow.core.logging_config import logger
from deviflow.crud.user import user as user_crud
from deviflow.dependencies import guard
from deviflow.models.user import ADMIN_ROLES
from deviflow.schemas.common import MessageResponse
from deviflow.schemas.user import UserCreate, UserUpdate, UserResponse
from deviflow.services.user import user_service

router = APIRouter()

admin_access = guard(roles=ADMIN_ROLES, host_bound=True)
admin_user_access = guard(roles=ADMIN_ROLES, resource=ResourceRef(user_crud, "user_id"), host_bound=True)


@router.get("/users", response_model=List[UserResponse])
def get_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(admin_access)
):
    """
    List users of your tenant.

    Requires admin or superadmin role.
    """
    return user_service.get_users(db, ctx.scope, skip=skip, limit=limit)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(admin_access)
):
    """
    Create a user in your tenant.

    The tenant is taken from the token; a tenant sent in the body is ignored.
    """
    logger.info(f"Creating user: tenant_id={ctx.scope.tenant_id} email={user_data.email}")
    return user_service.create_user(db, ctx.scope, user_data)


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    ctx: GateContext = Depends(admin_user_access)
):
    return ctx.resource


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(admin_user_access)
):
    return user_service.update_user(db, ctx.scope, user_id, user_data)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: GateContext = Depends(admin_user_access)
):
    """
    Delete a user of your tenant.

    Users referenced by checklists or work orders are deactivated instead.
    You cannot delete your own account.
    """
    deleted = user_service.delete_user(db, ctx.scope, user_id)
    return MessageResponse(message="User deleted" if deleted else "User deactivated")
