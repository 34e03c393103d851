from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus import schedules
from campus.database import get_db
from campus.dependencies import get_current_principal, require_admin
from campus.models import DayOfWeek, ResourceType, ScheduleEntry
from campus.schemas import Message, Principal, ScheduleCreate, ScheduleRead, ScheduleUpdate

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.get("/{resource_type}/{resource_id}", response_model=list[ScheduleRead])
def get_schedules_for_resource(
    resource_type: ResourceType,
    resource_id: int,
    day: Optional[DayOfWeek] = None,
    _: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> list[ScheduleEntry]:
    """Weekly entries for one classroom or lab, Monday first, then by start time.

    Approved booking requests for the same resource are listed separately by
    ``GET /api/booking-requests?status=approved``; clients overlay the two.
    """
    return schedules.schedules_for_resource(db, resource_type, resource_id, day)


@router.post("", response_model=ScheduleRead, status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule_in: ScheduleCreate,
    _: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ScheduleEntry:
    return schedules.create_schedule(db, schedule_in.model_dump())


@router.put("/{schedule_id}", response_model=ScheduleRead)
def update_schedule(
    schedule_id: int,
    schedule_update: ScheduleUpdate,
    _: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ScheduleEntry:
    return schedules.update_schedule(db, schedule_id, schedule_update.model_dump(exclude_unset=True))


@router.delete("/{schedule_id}", response_model=Message)
def delete_schedule(
    schedule_id: int,
    _: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> Message:
    schedules.delete_schedule(db, schedule_id)
    return Message(message="Schedule deleted successfully")
