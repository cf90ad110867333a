from typing import Optional, Dict, Any, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, exists
from deviflow.crud.base import CRUDBase
from deviflow.models.tenant import Tenant
from deviflow.models.user import User, Role
from deviflow.models.checklist import Checklist
from deviflow.models.work_order import WorkOrder
from deviflow.schemas.user import UserCreate, UserUpdate
from deviflow.core.security import get_password_hash
from deviflow.core.tenant_context import TenantScope, require_scope


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    """
    CRUD operations for User model.

    Scoped reads and writes come from CRUDBase. Login and self-registration
    run before any token exists, so they take the Tenant record resolved from
    the request host instead of a TenantScope.
    """

    def get_by_email(self, db: Session, tenant: Tenant, email: str) -> Optional[User]:
        """
        Retrieve a user by (tenant, email).

        The same email may exist in several tenants as distinct users.

        Args:
            db: Database session
            tenant: Resolved tenant
            email: User email

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(
            User.tenant_id == tenant.id,
            User.email == email.strip().lower()
        )
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def create_in_tenant(
        self,
        db: Session,
        tenant: Tenant,
        *,
        email: str,
        password: str,
        role: Role = Role.user,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        is_active: bool = True
    ) -> User:
        """
        Create a new user with hashed password in the given tenant.

        Raises:
            ValueError: If the email already exists in the tenant
        """
        db_user = User(
            tenant_id=tenant.id,
            email=email.strip().lower(),
            hashed_password=get_password_hash(password),
            role=role,
            first_name=first_name,
            last_name=last_name,
            is_active=is_active,
        )
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValueError(f"User with email {email} already exists")
        db.refresh(db_user)
        return db_user

    def create(
        self,
        db: Session,
        scope: TenantScope,
        *,
        obj_in: Union[UserCreate, Dict[str, Any]]
    ) -> User:
        require_scope(scope)
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_user = User(
            tenant_id=scope.tenant_id,
            email=data["email"].strip().lower(),
            hashed_password=get_password_hash(data["password"]),
            role=data.get("role") or Role.user,
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            is_active=data.get("is_active", True),
        )
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValueError(f"User with email {data['email']} already exists")
        db.refresh(db_user)
        return db_user

    def update(
        self,
        db: Session,
        scope: TenantScope,
        id: int,
        *,
        obj_in: Union[UserUpdate, Dict[str, Any]]
    ) -> Optional[User]:
        if isinstance(obj_in, dict):
            update_data = dict(obj_in)
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password:
            update_data["hashed_password"] = get_password_hash(password)
        return super().update(db, scope, id, obj_in=update_data)

    def is_referenced(self, db: Session, scope: TenantScope, id: int) -> bool:
        """Whether business rows in the tenant point at this user."""
        require_scope(scope)
        for model in (Checklist, WorkOrder):
            stmt = select(exists().where(
                model.tenant_id == scope.tenant_id,
                model.created_by == id
            ))
            if db.execute(stmt).scalar():
                return True
        return False


# Create singleton instance
user = CRUDUser(User)
