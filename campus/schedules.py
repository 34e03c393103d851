"""Weekly schedule entries attached to classrooms and labs."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from .errors import NotFound, ValidationError
from .models import DayOfWeek, ResourceType, ScheduleEntry
from .resources import ResourceRef, ensure_resource_exists

logger = logging.getLogger(__name__)

# Monday sorts first, Sunday last
DAY_ORDER = case({day.value: index for index, day in enumerate(DayOfWeek)}, value=ScheduleEntry.day_of_week)

REQUIRED_FIELDS = ("day_of_week", "start_time", "end_time", "subject")


def schedules_for_resource(
    db: Session,
    resource_type: ResourceType,
    resource_id: int,
    day: Optional[DayOfWeek] = None,
) -> list[ScheduleEntry]:
    query = db.query(ScheduleEntry).filter(
        ScheduleEntry.resource_type == resource_type,
        ScheduleEntry.resource_id == resource_id,
    )
    if day is not None:
        query = query.filter(ScheduleEntry.day_of_week == day)
    return query.order_by(DAY_ORDER, ScheduleEntry.start_time, ScheduleEntry.id).all()


def get_schedule(db: Session, schedule_id: int) -> ScheduleEntry:
    entry = db.get(ScheduleEntry, schedule_id)
    if entry is None:
        raise NotFound("Schedule not found")
    return entry


def create_schedule(db: Session, data: Mapping[str, Any]) -> ScheduleEntry:
    ensure_resource_exists(db, ResourceRef(data["resource_type"], data["resource_id"]))
    entry = ScheduleEntry(**data)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Schedule %s added for %s %s", entry.id, entry.resource_type.value, entry.resource_id)
    return entry


def update_schedule(db: Session, schedule_id: int, updates: Mapping[str, Any]) -> ScheduleEntry:
    if not updates:
        raise ValidationError("No fields to update")
    cleared = [key for key in REQUIRED_FIELDS if key in updates and updates[key] is None]
    if cleared:
        raise ValidationError(f"{', '.join(sorted(cleared))} cannot be empty")
    entry = get_schedule(db, schedule_id)
    start = updates.get("start_time", entry.start_time)
    end = updates.get("end_time", entry.end_time)
    if end <= start:
        raise ValidationError("end_time must be after start_time")
    for key, value in updates.items():
        setattr(entry, key, value)
    db.commit()
    db.refresh(entry)
    return entry


def delete_schedule(db: Session, schedule_id: int) -> None:
    entry = get_schedule(db, schedule_id)
    db.delete(entry)
    db.commit()
    logger.info("Schedule %s deleted", schedule_id)
