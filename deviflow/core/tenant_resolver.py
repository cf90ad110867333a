from typing import Iterable, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from deviflow.core.config import settings
from deviflow.core.exceptions import TenantNotFound, TenantNotIndicated
from deviflow.core.logging_config import logger
from deviflow.crud.tenant import tenant as tenant_crud
from deviflow.database import get_db
from deviflow.models.tenant import Tenant


def strip_port(host: str) -> str:
    """Lower-cased hostname without port. Handles bracketed IPv6 literals."""
    host = host.strip().lower()
    if host.startswith("["):
        return host[1:].split("]", 1)[0]
    return host.split(":", 1)[0]


def extract_subdomain(host: str) -> Optional[str]:
    """
    Extract the tenant subdomain from a Host header.

    Examples:
    - "acme.deviflow.app" -> "acme"
    - "acme.localhost:5000" -> "acme"
    - "localhost:5000" -> None (no subdomain)
    - "" -> None
    """
    hostname = strip_port(host)
    parts = hostname.split(".")
    if len(parts) < 2 or not parts[0]:
        return None
    return parts[0]


def matches_suffix(hostname: str, suffix: str) -> bool:
    """Whether hostname is the suffix domain or a host under it, on a label boundary."""
    suffix = suffix.lstrip(".")
    return bool(suffix) and (hostname == suffix or hostname.endswith("." + suffix))


class TenantResolver:
    """
    Maps a request's Host header to a tenant.

    Outside production, hosts listed in an explicit exception table (exact
    development hostnames plus preview-domain suffixes) resolve to a
    configured fallback tenant so local and preview deployments stay usable.
    The table is only consulted when host fallback is enabled.
    """

    def __init__(
        self,
        *,
        fallback_enabled: bool = False,
        fallback_subdomain: Optional[str] = None,
        dev_hosts: Iterable[str] = (),
        preview_suffixes: Iterable[str] = ()
    ):
        self.fallback_enabled = fallback_enabled
        self.fallback_subdomain = fallback_subdomain.lower() if fallback_subdomain else None
        self.dev_hosts = frozenset(h.lower() for h in dev_hosts)
        self.preview_suffixes = tuple(s.lower() for s in preview_suffixes)

    @classmethod
    def from_settings(cls, config) -> "TenantResolver":
        return cls(
            fallback_enabled=config.host_fallback_enabled,
            fallback_subdomain=config.FALLBACK_TENANT_SUBDOMAIN,
            dev_hosts=config.DEV_HOSTS,
            preview_suffixes=config.PREVIEW_HOST_SUFFIXES,
        )

    def fallback_for(self, hostname: str) -> Optional[str]:
        """Fallback subdomain for a hostname in the exception table, if any."""
        if not self.fallback_enabled or not self.fallback_subdomain:
            return None
        if hostname in self.dev_hosts:
            return self.fallback_subdomain
        if any(matches_suffix(hostname, suffix) for suffix in self.preview_suffixes):
            return self.fallback_subdomain
        return None

    def subdomain_for(self, host: str) -> str:
        """
        Determine the tenant subdomain a host addresses.

        Raises:
            TenantNotIndicated: If the host carries no subdomain and is not
                in the fallback table
        """
        hostname = strip_port(host or "")
        fallback = self.fallback_for(hostname)
        if fallback:
            return fallback
        subdomain = extract_subdomain(hostname)
        if subdomain is None:
            raise TenantNotIndicated()
        return subdomain

    def resolve(self, db: Session, host: str) -> Tenant:
        """
        Resolve the tenant addressed by a host.

        Args:
            db: Database session
            host: Host header value, port allowed

        Returns:
            Tenant record

        Raises:
            TenantNotIndicated: If no subdomain can be derived
            TenantNotFound: If no tenant has the subdomain
        """
        subdomain = self.subdomain_for(host)
        tenant = tenant_crud.get_by_subdomain(db, subdomain)
        if tenant is None:
            logger.info(f"No tenant for subdomain={subdomain}")
            raise TenantNotFound()
        return tenant


tenant_resolver = TenantResolver.from_settings(settings)


def get_tenant_resolver() -> TenantResolver:
    return tenant_resolver


def get_host_tenant(
    request: Request,
    db: Session = Depends(get_db),
    resolver: TenantResolver = Depends(get_tenant_resolver)
) -> Tenant:
    """
    FastAPI dependency resolving the tenant from the Host header.

    The resolved tenant is attached to request.state.tenant for later stages.
    """
    tenant = resolver.resolve(db, request.headers.get("host", ""))
    request.state.tenant = tenant
    return tenant
