"""Resolution of (resource_type, resource_id) references to catalog rows."""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, NamedTuple, Optional

from sqlalchemy.orm import Session

from .errors import NotFound
from .models import Classroom, Lab, ResourceType


class ResourceRef(NamedTuple):
    type: ResourceType
    id: int


# model and display-name column per resource type
RESOURCE_TABLE = {
    ResourceType.CLASSROOM: (Classroom, Classroom.room),
    ResourceType.LAB: (Lab, Lab.name),
}


def ensure_resource_exists(db: Session, ref: ResourceRef) -> None:
    model, _ = RESOURCE_TABLE[ref.type]
    if db.get(model, ref.id) is None:
        raise NotFound(f"{ref.type.value.capitalize()} {ref.id} not found")


def resource_names(db: Session, refs: Iterable[ResourceRef]) -> dict[ResourceRef, Optional[str]]:
    """Look up display names for ``refs`` with one query per resource type."""

    wanted: dict[ResourceType, set[int]] = defaultdict(set)
    for ref in refs:
        wanted[ResourceType(ref.type)].add(ref.id)

    names: dict[ResourceRef, Optional[str]] = {}
    for resource_type, ids in wanted.items():
        model, name_column = RESOURCE_TABLE[resource_type]
        rows = db.query(model.id, name_column).filter(model.id.in_(ids)).all()
        found = {row_id: name for row_id, name in rows}
        for resource_id in ids:
            names[ResourceRef(resource_type, resource_id)] = found.get(resource_id)
    return names
