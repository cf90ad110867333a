import enum
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from deviflow.database import Base, TimestampMixin


class Role(str, enum.Enum):
    user = "user"
    admin = "admin"
    superadmin = "superadmin"


ADMIN_ROLES = frozenset({Role.admin, Role.superadmin})
SUPERADMIN_ROLES = frozenset({Role.superadmin})


class User(Base, TimestampMixin):
    __tablename__ = "user"
    # Email is unique per tenant, not globally
    __table_args__ = (UniqueConstraint("tenant_id", "email", name="uq_user_tenant_email"),)

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    email = Column(String, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.user)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    tenant = relationship("Tenant", back_populates="users")
