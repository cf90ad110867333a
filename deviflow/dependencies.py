from dataclasses import replace
from typing import Iterable, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from deviflow.database import get_db
from deviflow.core.config import settings
from deviflow.core.exceptions import Unauthenticated
from deviflow.core.gate import AuthorizationGate, GateContext, ResourceRef, RoutePolicy
from deviflow.core.security import token_service
from deviflow.core.tenant_context import TenantScope
from deviflow.core.tenant_resolver import TenantResolver, get_tenant_resolver
from deviflow.models.tenant import Module
from deviflow.models.user import Role


authorization_gate = AuthorizationGate.default(token_service, settings.PUBLIC_PATHS)


def get_gate() -> AuthorizationGate:
    return authorization_gate


def authenticate(
    request: Request,
    db: Session = Depends(get_db),
    gate: AuthorizationGate = Depends(get_gate)
) -> GateContext:
    """
    Default-deny dependency attached to the whole application.

    Every route outside the public allow-list needs a valid token bound to an
    existing tenant. FastAPI caches the result per request, so route guards
    that depend on it reuse the verified context.
    """
    ctx = gate.run(GateContext(
        db=db,
        path=request.url.path,
        authorization=request.headers.get("authorization"),
    ))
    if not ctx.public:
        request.state.scope = ctx.scope
    return ctx


def guard(
    *,
    roles: Optional[Iterable[Role]] = None,
    module: Optional[Module] = None,
    resource: Optional[ResourceRef] = None,
    host_bound: bool = False
):
    """
    Build a FastAPI dependency that applies a route policy on top of the
    authenticated context.

    Args:
        roles: Roles allowed on the route (any role if omitted)
        module: Module the route belongs to
        resource: Tenant-owned record named by a path parameter
        host_bound: Whether the token tenant must match the Host tenant

    Returns:
        Dependency yielding the final GateContext
    """
    policy = RoutePolicy(
        roles=frozenset(roles) if roles else None,
        module=module,
        resource=resource,
        host_bound=host_bound,
    )

    def dependency(
        request: Request,
        base: GateContext = Depends(authenticate),
        db: Session = Depends(get_db),
        gate: AuthorizationGate = Depends(get_gate),
        resolver: TenantResolver = Depends(get_tenant_resolver)
    ) -> GateContext:
        # A route that declares a policy always needs a principal
        if base.public:
            raise Unauthenticated()

        host_tenant = None
        if host_bound:
            host_tenant = resolver.resolve(db, request.headers.get("host", ""))
            request.state.tenant = host_tenant

        return gate.run(replace(
            base,
            policy=policy,
            path_params=dict(request.path_params),
            host_tenant=host_tenant,
        ))

    return dependency


# Requests addressed to a tenant host must carry a token of that tenant
tenant_member = guard(host_bound=True)


def get_gate_context(ctx: GateContext = Depends(tenant_member)) -> GateContext:
    """Gate context for handlers that need no extra role/module policy."""
    return ctx


def get_tenant_scope(ctx: GateContext = Depends(get_gate_context)) -> TenantScope:
    """
    FastAPI dependency that returns the caller's TenantScope.

    The tenant is taken from the verified token only. Handlers pass this
    scope explicitly through the service and CRUD layers.
    """
    return ctx.scope
