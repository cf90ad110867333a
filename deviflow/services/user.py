from typing import List
from sqlalchemy.orm import Session
from deviflow.core.exceptions import BadRequest, Conflict, InsufficientRole, ResourceNotFound
from deviflow.core.logging_config import logger
from deviflow.core.tenant_context import TenantScope
from deviflow.crud.user import user as user_crud
from deviflow.models.user import Role, User
from deviflow.schemas.user import UserCreate, UserUpdate


class UserService:
    """
    Tenant admin user management.

    All operations act inside the caller's tenant. Only a superadmin may
    grant or manage the superadmin role, and nobody may delete or deactivate
    their own account.
    """

    def __init__(self):
        self.crud = user_crud

    def _check_superadmin_grant(self, scope: TenantScope, role) -> None:
        if role == Role.superadmin and scope.role != Role.superadmin:
            raise InsufficientRole("Requires role: superadmin")

    def get_user(self, db: Session, scope: TenantScope, user_id: int) -> User:
        user = self.crud.get(db, scope, user_id)
        if not user:
            raise ResourceNotFound()
        return user

    def get_users(self, db: Session, scope: TenantScope, skip: int = 0, limit: int = 100) -> List[User]:
        return self.crud.get_multi(db, scope, skip=skip, limit=limit)

    def create_user(self, db: Session, scope: TenantScope, user_data: UserCreate) -> User:
        """
        Create a user in the caller's tenant.

        Raises:
            InsufficientRole: If a non-superadmin grants the superadmin role
            Conflict: If the email already exists in the tenant
        """
        self._check_superadmin_grant(scope, user_data.role)
        try:
            user = self.crud.create(db, scope, obj_in=user_data)
        except ValueError:
            raise Conflict("User already exists")
        logger.info(f"User created: tenant_id={scope.tenant_id} user_id={user.id} by={scope.user_id}")
        return user

    def update_user(self, db: Session, scope: TenantScope, user_id: int, user_data: UserUpdate) -> User:
        target = self.get_user(db, scope, user_id)
        self._check_superadmin_grant(scope, target.role)
        self._check_superadmin_grant(scope, user_data.role)
        if user_id == scope.user_id and user_data.is_active is False:
            raise BadRequest("You cannot deactivate your own account")
        return self.crud.update(db, scope, user_id, obj_in=user_data)

    def delete_user(self, db: Session, scope: TenantScope, user_id: int) -> bool:
        """
        Delete a user, or deactivate it when business records reference it.

        Returns:
            True if the user was deleted, False if it was deactivated

        Raises:
            BadRequest: If the caller targets its own account
            ResourceNotFound: If the user is not in the caller's tenant
        """
        if user_id == scope.user_id:
            raise BadRequest("You cannot delete your own account")
        target = self.get_user(db, scope, user_id)
        self._check_superadmin_grant(scope, target.role)

        if self.crud.is_referenced(db, scope, user_id):
            self.crud.update(db, scope, user_id, obj_in={"is_active": False})
            logger.info(f"User deactivated: tenant_id={scope.tenant_id} user_id={user_id} by={scope.user_id}")
            return False

        self.crud.delete(db, scope, user_id)
        logger.info(f"User deleted: tenant_id={scope.tenant_id} user_id={user_id} by={scope.user_id}")
        return True


# Create a singleton instance
user_service = UserService()
