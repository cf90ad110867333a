from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from deviflow.database import get_db
from deviflow.core.gate import GateContext
from deviflow.core.tenant_resolver import get_host_tenant
from deviflow.dependencies import get_gate_context
from deviflow.models.tenant import Tenant
from deviflow.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, TenantSummary
from deviflow.schemas.user import UserResponse
from deviflow.services.auth import auth_service
from deviflow.services.user import user_service

router = APIRouter()


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_host_tenant)
):
    """
    Log in to the tenant addressed by the request host.

    Args:
        credentials: Email and password
        db: Database session
        tenant: Tenant resolved from the Host header

    Returns:
        Signed session token plus user and tenant info

    Raises:
        InvalidCredentials (401): Same response for unknown email,
            inactive user and wrong password
    """
    return auth_service.login(db, tenant, credentials)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_host_tenant)
):
    """
    Self-register a `user`-role account in the host tenant.

    Any role or tenant sent in the body is ignored.
    """
    return auth_service.register(db, tenant, data)


@router.get("/me", response_model=MeResponse)
def me(ctx: GateContext = Depends(get_gate_context)):
    """Current principal and its tenant."""
    user = user_service.get_user(ctx.db, ctx.scope, ctx.scope.user_id)
    return MeResponse(
        user=UserResponse.model_validate(user),
        tenant=TenantSummary.model_validate(ctx.tenant),
    )
