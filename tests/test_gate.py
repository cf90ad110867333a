from dataclasses import replace

import pytest

from deviflow.core.exceptions import (
    InsufficientRole, InvalidToken, ModuleNotEnabled, ResourceNotFound, TenantMismatch, Unauthenticated
)
from deviflow.core.gate import (
    AuthorizationGate, GateContext, ResourceRef, RoutePolicy, is_public_path
)
from deviflow.core.security import TokenService
from deviflow.crud.checklist import checklist as checklist_crud
from deviflow.models.checklist import Checklist
from deviflow.models.tenant import Module
from deviflow.models.user import ADMIN_ROLES, Role

PUBLIC = ["/api/health", "/api/auth/login", "/api/auth/register"]


@pytest.fixture()
def tokens():
    return TokenService("gate-test-secret")


@pytest.fixture()
def gate(tokens):
    return AuthorizationGate.default(tokens, PUBLIC)


def bearer(tokens, user):
    token = tokens.issue(user_id=user.id, tenant_id=user.tenant_id, role=user.role, email=user.email)
    return f"Bearer {token}"


def context(db, path="/api/modules/checklists/checklists", authorization=None, **kwargs):
    return GateContext(db=db, path=path, authorization=authorization, **kwargs)


@pytest.mark.parametrize("path,expected", [
    ("/api/health", True),
    ("/api/health/", True),
    ("/api/auth/login", True),
    ("/api/auth/register", True),
    ("/api/healthcheck", False),
    ("/api/auth/login-as", False),
    ("/api/auth/me", False),
    ("/", False),
])
def test_public_paths_match_whole_segments(path, expected):
    assert is_public_path(path, PUBLIC) is expected


def test_public_path_skips_every_stage(db):
    calls = []
    gate = AuthorizationGate([lambda ctx: calls.append("step") or ctx], PUBLIC)
    ctx = gate.run(context(db, path="/api/auth/login"))
    assert ctx.public is True
    assert ctx.scope is None
    assert calls == []


def test_steps_run_in_order_and_stop_at_first_failure(db):
    calls = []

    def first(ctx):
        calls.append("first")
        return ctx

    def second(ctx):
        calls.append("second")
        raise InsufficientRole()

    def third(ctx):
        calls.append("third")
        return ctx

    gate = AuthorizationGate([first, second, third], PUBLIC)
    with pytest.raises(InsufficientRole):
        gate.run(context(db))
    assert calls == ["first", "second"]


def test_missing_token(db, gate):
    with pytest.raises(Unauthenticated):
        gate.run(context(db))


def test_valid_token_yields_scope_and_tenant(db, gate, tokens, acme_admin):
    ctx = gate.run(context(db, authorization=bearer(tokens, acme_admin)))
    assert ctx.scope.user_id == acme_admin.id
    assert ctx.scope.tenant_id == 7
    assert ctx.scope.role == Role.admin
    assert ctx.tenant.subdomain == "acme"


def test_context_is_not_mutated(db, gate, tokens, acme_admin):
    start = context(db, authorization=bearer(tokens, acme_admin))
    gate.run(start)
    assert start.scope is None
    assert start.tenant is None


def test_token_for_deleted_tenant(db, gate, tokens, acme):
    token = tokens.issue(user_id=1, tenant_id=999, role=Role.admin, email="ghost@acme.test")
    with pytest.raises(InvalidToken):
        gate.run(context(db, authorization=f"Bearer {token}"))


def test_host_bound_route_rejects_other_tenant(db, gate, tokens, acme_admin, globex):
    ctx = context(
        db,
        authorization=bearer(tokens, acme_admin),
        policy=RoutePolicy(host_bound=True),
        host_tenant=globex,
    )
    with pytest.raises(TenantMismatch):
        gate.run(ctx)


def test_host_is_ignored_on_unbound_route(db, gate, tokens, acme_admin, globex):
    ctx = gate.run(context(db, authorization=bearer(tokens, acme_admin), host_tenant=globex))
    assert ctx.tenant.id == 7


def test_role_gate(db, gate, tokens, acme_user, acme_admin):
    policy = RoutePolicy(roles=ADMIN_ROLES)
    with pytest.raises(InsufficientRole) as exc:
        gate.run(context(db, authorization=bearer(tokens, acme_user), policy=policy))
    assert exc.value.message == "Requires role: admin, superadmin"

    ctx = gate.run(context(db, authorization=bearer(tokens, acme_admin), policy=policy))
    assert ctx.scope.role == Role.admin


def test_module_gate(db, gate, tokens, acme_admin):
    with pytest.raises(ModuleNotEnabled) as exc:
        gate.run(context(
            db,
            authorization=bearer(tokens, acme_admin),
            policy=RoutePolicy(module=Module.maintenance),
        ))
    assert exc.value.message == "Module 'maintenance' not enabled for this tenant"


def test_resource_ownership(db, gate, tokens, acme_admin, globex_admin):
    own = Checklist(tenant_id=7, name="Own")
    foreign = Checklist(tenant_id=8, name="Foreign")
    db.add_all([own, foreign])
    db.commit()

    policy = RoutePolicy(resource=ResourceRef(checklist_crud, "checklist_id"))
    auth = bearer(tokens, acme_admin)

    ctx = gate.run(context(db, authorization=auth, policy=policy, path_params={"checklist_id": str(own.id)}))
    assert ctx.resource.id == own.id

    for params in ({"checklist_id": str(foreign.id)}, {"checklist_id": "424242"}, {"checklist_id": "abc"}, {}):
        with pytest.raises(ResourceNotFound):
            gate.run(context(db, authorization=auth, policy=policy, path_params=params))


@pytest.mark.parametrize("checklist_id", ["foreign", "424242"])
def test_role_is_reported_before_missing_resource(db, gate, tokens, acme_user, globex_admin, checklist_id):
    foreign = Checklist(tenant_id=8, name="Foreign")
    db.add(foreign)
    db.commit()
    if checklist_id == "foreign":
        checklist_id = foreign.id
    policy = RoutePolicy(roles=ADMIN_ROLES, resource=ResourceRef(checklist_crud, "checklist_id"))
    with pytest.raises(InsufficientRole):
        gate.run(context(
            db,
            authorization=bearer(tokens, acme_user),
            policy=policy,
            path_params={"checklist_id": checklist_id},
        ))


def test_module_is_reported_before_missing_resource(db, gate, tokens, acme_admin):
    policy = RoutePolicy(module=Module.maintenance, resource=ResourceRef(checklist_crud, "checklist_id"))
    with pytest.raises(ModuleNotEnabled):
        gate.run(context(
            db,
            authorization=bearer(tokens, acme_admin),
            policy=policy,
            path_params={"checklist_id": "424242"},
        ))


def test_rerun_with_policy_reuses_verified_context(db, acme_admin):
    verified = []

    class CountingTokens(TokenService):
        def verify(self, token):
            verified.append(token)
            return super().verify(token)

    tokens = CountingTokens("gate-test-secret")
    gate = AuthorizationGate.default(tokens, PUBLIC)
    base = gate.run(context(db, authorization=bearer(tokens, acme_admin)))
    ctx = gate.run(replace(base, policy=RoutePolicy(roles=ADMIN_ROLES, module=Module.checklists)))
    assert len(verified) == 1
    assert ctx.scope == base.scope


def test_role_is_checked_before_module(db, gate, tokens, acme_user):
    policy = RoutePolicy(roles=ADMIN_ROLES, module=Module.maintenance)
    with pytest.raises(InsufficientRole):
        gate.run(context(db, authorization=bearer(tokens, acme_user), policy=policy))


def test_custom_steps_receive_updated_context(db, tokens, acme_admin):
    seen = []
    base = AuthorizationGate.default(tokens, PUBLIC)
    gate = AuthorizationGate(base.steps + [lambda ctx: seen.append(ctx.tenant.id) or replace(ctx)], PUBLIC)
    gate.run(context(db, authorization=bearer(tokens, acme_admin)))
    assert seen == [7]
