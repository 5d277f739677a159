"""Storage gateway interface and its SQLAlchemy implementation."""

from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ServiceError, conflict, not_found
from app.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class StorageGateway(Protocol[ModelT]):
    """Narrow per-entity persistence interface the services depend on."""

    def get(self, entity_id: int) -> ModelT | None: ...

    def create(self, **values: Any) -> ModelT: ...

    def update(self, entity_id: int, **values: Any) -> ModelT: ...

    def delete(self, entity_id: int) -> None: ...

    def find_by(self, **criteria: Any) -> ModelT | None: ...


class SqlAlchemyGateway(Generic[ModelT]):
    """
    Single-row reads and writes, each committed on its own.

    update/delete are issued as statements keyed on id; if the row was removed
    concurrently they raise NotFound instead of touching anything. A write that
    violates a unique or foreign key constraint is rolled back and raised as
    Conflict.
    """

    model: type[ModelT]
    label: str = "Resource"

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def create(self, **values: Any) -> ModelT:
        row = self.model(**values)
        self.session.add(row)
        self._commit()
        self.session.refresh(row)
        return row

    def update(self, entity_id: int, **values: Any) -> ModelT:
        result = self._execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.rollback()
            raise not_found(f"{self.label} not found")
        self._commit()
        row = self.session.get(self.model, entity_id, populate_existing=True)
        if row is None:
            raise not_found(f"{self.label} not found")
        return row

    def delete(self, entity_id: int) -> None:
        result = self._execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.rollback()
            raise not_found(f"{self.label} not found")
        self._commit()
        stale = self.session.identity_map.get(
            self.session.identity_key(self.model, entity_id)
        )
        if stale is not None:
            self.session.expunge(stale)

    def find_by(self, **criteria: Any) -> ModelT | None:
        return self.session.scalars(
            select(self.model).filter_by(**criteria).limit(1)
        ).first()

    def _execute(self, statement: Any) -> Any:
        try:
            return self.session.execute(statement)
        except IntegrityError as exc:
            self.session.rollback()
            raise self._conflict() from exc

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise self._conflict() from exc

    def _conflict(self) -> ServiceError:
        return conflict(f"{self.label} conflicts with an existing record")
