from dataclasses import dataclass
from typing import Any, Dict
from deviflow.core.security import TokenClaims
from deviflow.models.user import Role

# Keys a client may use to smuggle a tenant into a write payload
TENANT_KEYS = ("tenant_id", "tenantId")


@dataclass(frozen=True)
class TenantScope:
    """
    Identity of the authenticated principal and the tenant it acts in.

    This is the only value the CRUD layer accepts as a tenant source. It is
    built from verified token claims by the authorization gate and never from
    request bodies.
    """
    user_id: int
    tenant_id: int
    role: Role
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "TenantScope":
        return cls(
            user_id=claims.user_id,
            tenant_id=claims.tenant_id,
            role=claims.role,
            email=claims.email,
        )


def require_scope(scope: Any) -> "TenantScope":
    """Reject anything that is not a gate-issued TenantScope."""
    if not isinstance(scope, TenantScope):
        raise TypeError(f"tenant-scoped access requires a TenantScope, got {type(scope).__name__}")
    return scope


def scrub_payload(payload: Dict[str, Any], method: str = "POST") -> Dict[str, Any]:
    """
    Drop client-supplied tenant identifiers from a raw write payload.

    The tenant is silently taken from the scope instead; the request is never
    rejected for carrying one. On POST the client-supplied `id` is dropped too.
    """
    cleaned = {k: v for k, v in payload.items() if k not in TENANT_KEYS}
    if method.upper() == "POST":
        cleaned.pop("id", None)
    return cleaned
