from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from deviflow.database import Base, TimestampMixin

class Checklist(Base, TimestampMixin):
    __tablename__ = "checklist"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    order = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=True)

    categories = relationship("ChecklistCategory", back_populates="checklist", cascade="all, delete-orphan")


class ChecklistCategory(Base, TimestampMixin):
    __tablename__ = "checklist_category"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenant.id"), nullable=False, index=True)
    checklist_id = Column(Integer, ForeignKey("checklist.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    checklist = relationship("Checklist", back_populates="categories")
