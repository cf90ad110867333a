from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Union
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, Select
from pydantic import BaseModel
from deviflow.database import Base
from deviflow.core.tenant_context import TenantScope, require_scope, scrub_payload

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic CRUD class with tenant isolation via TenantScope.

    Every accessor takes the scope as a required positional argument ahead of
    the record id, and every query carries the tenant predicate itself:
    `WHERE tenant_id = :tenant_id AND id = :id`. There is no way to fetch or
    mutate a record by id alone.

    Type Parameters:
        ModelType: SQLAlchemy model class (must have tenant_id)
        CreateSchemaType: Pydantic schema for creating records
        UpdateSchemaType: Pydantic schema for updating records
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD object with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def scoped(self, scope: TenantScope) -> Select:
        """Base SELECT restricted to the scope's tenant."""
        require_scope(scope)
        return select(self.model).where(self.model.tenant_id == scope.tenant_id)

    def get(self, db: Session, scope: TenantScope, id: int) -> Optional[ModelType]:
        """
        Retrieve a single record by ID within the scope's tenant.

        Args:
            db: Database session
            scope: Tenant scope of the caller
            id: Record ID

        Returns:
            Model instance or None if not found or owned by another tenant
        """
        stmt = self.scoped(scope).where(self.model.id == id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_multi(
        self,
        db: Session,
        scope: TenantScope,
        *,
        skip: int = 0,
        limit: int = 100
    ) -> List[ModelType]:
        """
        Retrieve multiple records with pagination within the scope's tenant.

        Args:
            db: Database session
            scope: Tenant scope of the caller
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of model instances belonging to the tenant
        """
        stmt = self.scoped(scope).order_by(self.model.id).offset(skip).limit(limit)
        result = db.execute(stmt)
        return list(result.scalars().all())

    def create(
        self,
        db: Session,
        scope: TenantScope,
        *,
        obj_in: Union[CreateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Create a new record in the scope's tenant.

        Any tenant identifier or id present in the payload is discarded.

        Args:
            db: Database session
            scope: Tenant scope of the caller
            obj_in: Pydantic schema or dict with creation data

        Returns:
            Created model instance
        """
        require_scope(scope)
        obj_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        obj_data = scrub_payload(obj_data, "POST")
        db_obj = self.model(tenant_id=scope.tenant_id, **obj_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self,
        db: Session,
        scope: TenantScope,
        id: int,
        *,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> Optional[ModelType]:
        """
        Update a record in the scope's tenant.

        Args:
            db: Database session
            scope: Tenant scope of the caller
            id: Record ID
            obj_in: Pydantic schema or dict with update data

        Returns:
            Updated model instance or None if not found in the tenant
        """
        db_obj = self.get(db, scope, id)
        if db_obj is None:
            return None

        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        update_data = scrub_payload(update_data, "PATCH")
        update_data.pop("id", None)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, scope: TenantScope, id: int) -> bool:
        """
        Delete a record by ID within the scope's tenant.

        Args:
            db: Database session
            scope: Tenant scope of the caller
            id: Record ID to delete

        Returns:
            True if a record was deleted
        """
        require_scope(scope)
        stmt = delete(self.model).where(
            self.model.tenant_id == scope.tenant_id,
            self.model.id == id
        )
        result = db.execute(stmt)
        db.commit()
        return result.rowcount > 0
