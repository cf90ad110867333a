from sqlalchemy.orm import Session
from deviflow.core.exceptions import Conflict, InvalidCredentials
from deviflow.core.logging_config import logger
from deviflow.core.security import TokenService, token_service, verify_password, dummy_password_hash
from deviflow.crud.user import user as user_crud
from deviflow.models.tenant import Module, Tenant
from deviflow.models.user import Role, User
from deviflow.schemas.auth import (
    AuthResponse, LoginRequest, ModuleStatus, ModulesResponse, RegisterRequest, TenantSummary
)
from deviflow.schemas.user import UserResponse

MODULE_CATALOG = {
    Module.checklists: ("Checklists", "Digital checklists for production logging"),
    Module.maintenance: ("Maintenance", "Maintenance work order management"),
    Module.deviations: ("Deviations", "Deviation tracking with workflow"),
    Module.kanban: ("Kanban", "Task board for follow-up actions"),
}


class AuthService:
    """
    Credential verification, token issuing and self-registration.

    Login and registration work against the tenant resolved from the request
    host; everything after login works from the token.
    """

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def authenticate(self, db: Session, tenant: Tenant, email: str, password: str) -> User:
        """
        Verify an email/password pair against one tenant's users.

        Unknown email, inactive user and wrong password all raise the same
        InvalidCredentials, and all three pay for one bcrypt comparison.

        Args:
            db: Database session
            tenant: Tenant resolved from the request host
            email: Login email
            password: Plain text password

        Returns:
            The authenticated User

        Raises:
            InvalidCredentials: If the credentials do not match an active user
        """
        user = user_crud.get_by_email(db, tenant, email)
        if user is None:
            verify_password(password, dummy_password_hash())
            raise InvalidCredentials()

        password_ok = verify_password(password, user.hashed_password)
        if not password_ok or not user.is_active:
            raise InvalidCredentials()
        return user

    def issue_for(self, user: User) -> str:
        return self.tokens.issue(
            user_id=user.id,
            tenant_id=user.tenant_id,
            role=user.role,
            email=user.email,
        )

    def login(self, db: Session, tenant: Tenant, credentials: LoginRequest) -> AuthResponse:
        try:
            user = self.authenticate(db, tenant, credentials.email, credentials.password)
        except InvalidCredentials:
            logger.info(f"Login failed: tenant_id={tenant.id} email={credentials.email}")
            raise
        logger.info(f"Login succeeded: tenant_id={tenant.id} user_id={user.id}")
        return AuthResponse(
            token=self.issue_for(user),
            user=UserResponse.model_validate(user),
            tenant=TenantSummary.model_validate(tenant),
        )

    def register(self, db: Session, tenant: Tenant, data: RegisterRequest) -> AuthResponse:
        """
        Create a `user`-role account in the host tenant and log it in.

        Raises:
            Conflict: If the email is already registered in this tenant
        """
        if user_crud.get_by_email(db, tenant, data.email):
            raise Conflict("User already exists")
        try:
            user = user_crud.create_in_tenant(
                db,
                tenant,
                email=data.email,
                password=data.password,
                role=Role.user,
                first_name=data.first_name,
                last_name=data.last_name,
            )
        except ValueError:
            raise Conflict("User already exists")
        logger.info(f"User registered: tenant_id={tenant.id} user_id={user.id}")
        return AuthResponse(
            token=self.issue_for(user),
            user=UserResponse.model_validate(user),
            tenant=TenantSummary.model_validate(tenant),
        )

    def describe_modules(self, tenant: Tenant) -> ModulesResponse:
        enabled = tenant.module_set
        return ModulesResponse(
            tenant=TenantSummary.model_validate(tenant),
            modules=sorted(m.value for m in enabled),
            available_modules=[
                ModuleStatus(
                    name=module.value,
                    display_name=display_name,
                    description=description,
                    enabled=module in enabled,
                )
                for module, (display_name, description) in MODULE_CATALOG.items()
            ],
        )


auth_service = AuthService(token_service)
