"""
Authorization gate for protected requests.

The gate is an ordered list of steps. Each step takes the immutable
GateContext and either returns an updated copy or raises an AppError, which
ends the request. Stage order is fixed:

1. verify_token                 -> 401 / 403
2. enforce_tenant_isolation     -> 403
3. validate_resource_ownership  -> lookup only
4. check_role                   -> 403
5. check_module                 -> 403
6. reject_missing_resource      -> 404 (same as a missing resource)

A resource miss found in stage 3 is reported last, so a caller lacking the
role or module gets the 403 whether or not the id exists.

Steps whose output the context already carries are no-ops, so a context that
went through the gate once can be run again with a route policy attached.

Paths on the public allow-list skip every stage.
"""
from dataclasses import dataclass, field, replace
from functools import partial
from typing import Any, Callable, FrozenSet, Iterable, List, Mapping, Optional, Sequence
from sqlalchemy.orm import Session
from deviflow.core.exceptions import (
    AppError, InsufficientRole, InvalidToken, ModuleNotEnabled, ResourceNotFound, TenantMismatch
)
from deviflow.core.logging_config import logger
from deviflow.core.security import TokenClaims, TokenService, bearer_token
from deviflow.core.tenant_context import TenantScope
from deviflow.crud.base import CRUDBase
from deviflow.crud.tenant import tenant as tenant_crud
from deviflow.models.tenant import Module, Tenant
from deviflow.models.user import Role


@dataclass(frozen=True)
class ResourceRef:
    """A tenant-owned record named by a path parameter."""
    crud: CRUDBase
    param: str = "id"


@dataclass(frozen=True)
class RoutePolicy:
    roles: Optional[FrozenSet[Role]] = None
    module: Optional[Module] = None
    resource: Optional[ResourceRef] = None
    host_bound: bool = False


@dataclass(frozen=True)
class GateContext:
    db: Session
    path: str
    authorization: Optional[str]
    policy: RoutePolicy = RoutePolicy()
    path_params: Mapping[str, Any] = field(default_factory=dict)
    host_tenant: Optional[Tenant] = None
    public: bool = False
    claims: Optional[TokenClaims] = None
    scope: Optional[TenantScope] = None
    tenant: Optional[Tenant] = None
    resource: Optional[Any] = None
    resource_missing: bool = False


Step = Callable[[GateContext], GateContext]


def verify_token(ctx: GateContext, *, tokens: TokenService) -> GateContext:
    if ctx.claims is not None:
        return ctx
    token = bearer_token(ctx.authorization)
    claims = tokens.verify(token)
    return replace(ctx, claims=claims, scope=TenantScope.from_claims(claims))


def enforce_tenant_isolation(ctx: GateContext) -> GateContext:
    tenant = ctx.tenant or tenant_crud.get(ctx.db, ctx.scope.tenant_id)
    if tenant is None:
        # Token signed for a tenant that no longer exists
        raise InvalidToken()
    if ctx.policy.host_bound and ctx.host_tenant is not None and ctx.host_tenant.id != tenant.id:
        raise TenantMismatch()
    return replace(ctx, tenant=tenant)


def validate_resource_ownership(ctx: GateContext) -> GateContext:
    ref = ctx.policy.resource
    if ref is None:
        return ctx
    try:
        resource_id = int(ctx.path_params[ref.param])
    except (KeyError, TypeError, ValueError):
        return replace(ctx, resource_missing=True)
    resource = ref.crud.get(ctx.db, ctx.scope, resource_id)
    if resource is None:
        return replace(ctx, resource_missing=True)
    return replace(ctx, resource=resource)


def check_role(ctx: GateContext) -> GateContext:
    roles = ctx.policy.roles
    if roles and ctx.scope.role not in roles:
        names = ", ".join(sorted(r.value for r in roles))
        raise InsufficientRole(f"Requires role: {names}")
    return ctx


def check_module(ctx: GateContext) -> GateContext:
    module = ctx.policy.module
    if module is not None and not ctx.tenant.has_module(module):
        raise ModuleNotEnabled(f"Module '{module.value}' not enabled for this tenant")
    return ctx


def reject_missing_resource(ctx: GateContext) -> GateContext:
    if ctx.resource_missing:
        raise ResourceNotFound()
    return ctx


def is_public_path(path: str, public_paths: Iterable[str]) -> bool:
    """Prefix match that only accepts whole path segments."""
    for prefix in public_paths:
        prefix = prefix.rstrip("/")
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


class AuthorizationGate:
    def __init__(self, steps: Sequence[Step], public_paths: Iterable[str] = ()):
        self.steps: List[Step] = list(steps)
        self.public_paths = tuple(public_paths)

    @classmethod
    def default(cls, tokens: TokenService, public_paths: Iterable[str] = ()) -> "AuthorizationGate":
        return cls(
            steps=[
                partial(verify_token, tokens=tokens),
                enforce_tenant_isolation,
                validate_resource_ownership,
                check_role,
                check_module,
                reject_missing_resource,
            ],
            public_paths=public_paths,
        )

    def run(self, ctx: GateContext) -> GateContext:
        """
        Pass the context through every stage in order.

        Returns:
            The final context, carrying scope, tenant and any loaded resource

        Raises:
            AppError: From the first stage that denies the request
        """
        if is_public_path(ctx.path, self.public_paths):
            return replace(ctx, public=True)
        for step in self.steps:
            try:
                ctx = step(ctx)
            except AppError as e:
                user_id = ctx.scope.user_id if ctx.scope else None
                logger.warning(f"Access denied: path={ctx.path} error={e.error} user_id={user_id}")
                raise
        return ctx
