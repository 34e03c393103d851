"""Generic CRUD repository shared by the resource catalogs."""
from __future__ import annotations

from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.sql.elements import ColumnElement

from .database import Base
from .errors import ConflictError, NotFound
from .models import Bus, BusStop, Classroom, Lab, MenuItem

ModelT = TypeVar("ModelT", bound=Base)

ALL = "all"


class CatalogRepository(Generic[ModelT]):
    """Parameterised list/get/create/update/delete over one catalog table.

    ``filters`` names the columns accepted as exact-match filters, ``search``
    the columns matched case-insensitively by the free-text ``search`` term
    and ``order_by`` the listing order.
    """

    def __init__(
        self,
        model: type[ModelT],
        label: str,
        *,
        filters: Sequence[InstrumentedAttribute] = (),
        search: Sequence[InstrumentedAttribute] = (),
        order_by: Sequence[InstrumentedAttribute] = (),
    ) -> None:
        self.model = model
        self.label = label
        self.filters = {column.key: column for column in filters}
        self.search_columns = tuple(search)
        self.order_by = tuple(order_by)

    def search_clauses(self, pattern: str) -> list[ColumnElement[bool]]:
        return [column.ilike(pattern) for column in self.search_columns]

    def list(self, db: Session, search: Optional[str] = None, **filters: Any) -> list[ModelT]:
        query = db.query(self.model)
        for key, value in filters.items():
            if value is None or value == ALL:
                continue
            query = query.filter(self.filters[key] == value)
        if search:
            query = query.filter(or_(*self.search_clauses(f"%{search}%")))
        return query.order_by(*self.order_by, self.model.id).all()

    def get(self, db: Session, item_id: int) -> ModelT:
        item = db.get(self.model, item_id)
        if item is None:
            raise NotFound(f"{self.label} not found")
        return item

    def create(self, db: Session, data: Mapping[str, Any]) -> ModelT:
        item = self.model(**data)
        db.add(item)
        self._commit(db)
        db.refresh(item)
        return item

    def update(self, db: Session, item_id: int, data: Mapping[str, Any]) -> ModelT:
        item = self.get(db, item_id)
        for key, value in data.items():
            setattr(item, key, value)
        self._commit(db)
        db.refresh(item)
        return item

    def delete(self, db: Session, item_id: int) -> None:
        item = self.get(db, item_id)
        db.delete(item)
        self._commit(db)

    def count(self, db: Session) -> int:
        return db.query(self.model).count()

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(f"{self.label} conflicts with an existing record") from exc


class BusRepository(CatalogRepository[Bus]):
    """Buses also match the search term against their stop names."""

    def search_clauses(self, pattern: str) -> list[ColumnElement[bool]]:
        return super().search_clauses(pattern) + [Bus.stop_rows.any(BusStop.stop_name.ilike(pattern))]


classrooms = CatalogRepository(
    Classroom,
    "Classroom",
    filters=(Classroom.dept,),
    search=(Classroom.room, Classroom.dept, Classroom.floor),
    order_by=(Classroom.floor, Classroom.room),
)

labs = CatalogRepository(
    Lab,
    "Lab",
    filters=(Lab.status, Lab.dept),
    search=(Lab.name, Lab.dept),
    order_by=(Lab.name,),
)

buses = BusRepository(
    Bus,
    "Bus",
    search=(Bus.number, Bus.route),
    order_by=(Bus.number,),
)

menu_items = CatalogRepository(
    MenuItem,
    "Menu item",
    filters=(MenuItem.category, MenuItem.availability),
    search=(MenuItem.name, MenuItem.description),
    order_by=(MenuItem.category, MenuItem.name),
)
