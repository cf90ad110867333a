import enum
from typing import FrozenSet, Iterable
from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship
from deviflow.database import Base, TimestampMixin


class Module(str, enum.Enum):
    checklists = "checklists"
    maintenance = "maintenance"
    deviations = "deviations"
    kanban = "kanban"

    @classmethod
    def parse_many(cls, names: Iterable[str]) -> FrozenSet["Module"]:
        """Convert stored module names to enum members, skipping unknown names."""
        known = {m.value: m for m in cls}
        return frozenset(known[n] for n in names if n in known)


class Tenant(Base, TimestampMixin):
    __tablename__ = "tenant"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    subdomain = Column(String, unique=True, index=True, nullable=False)
    modules = Column(JSON, nullable=False, default=list)

    users = relationship("User", back_populates="tenant")

    @property
    def module_set(self) -> FrozenSet[Module]:
        return Module.parse_many(self.modules or [])

    def has_module(self, module: Module) -> bool:
        return module in self.module_set
