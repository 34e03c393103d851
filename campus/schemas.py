"""Pydantic schemas for the portal API."""
from __future__ import annotations

from datetime import date as date_type, datetime, time as time_type
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator

from .models import (
    BookingStatus,
    DayOfWeek,
    LabStatus,
    MenuAvailability,
    MenuCategory,
    ResourceType,
    RoleEnum,
)


class Principal(BaseModel):
    """Caller identity as carried by a verified bearer token."""

    id: int
    student_id: str
    name: str
    role: RoleEnum

    @property
    def is_admin(self) -> bool:
        return self.role == RoleEnum.ADMIN


class UserBase(BaseModel):
    student_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)


class SignupRequest(UserBase):
    password: str = Field(..., min_length=6)


class SigninRequest(BaseModel):
    student_id: str
    password: str


class UserRead(UserBase):
    id: int
    role: RoleEnum
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class Message(BaseModel):
    message: str


def _check_time_range(start: Optional[time_type], end: Optional[time_type]) -> None:
    if start is not None and end is not None and end <= start:
        raise ValueError("end_time must be after start_time")


class ClassroomCreate(BaseModel):
    room: str = Field(..., max_length=50)
    dept: str = Field(..., max_length=50)
    floor: str = Field(..., max_length=50)
    capacity: int = Field(..., ge=0)


class ClassroomUpdate(BaseModel):
    room: Optional[str] = Field(None, max_length=50)
    dept: Optional[str] = Field(None, max_length=50)
    floor: Optional[str] = Field(None, max_length=50)
    capacity: Optional[int] = Field(None, ge=0)


class ClassroomRead(ClassroomCreate):
    id: int

    model_config = {"from_attributes": True}


class LabCreate(BaseModel):
    name: str = Field(..., max_length=100)
    dept: str = Field(..., max_length=50)
    location: str
    computers: int = Field(..., ge=0)
    projector: str = "No"
    instruments: str = "None"
    status: LabStatus
    hours: str


class LabUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    dept: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = None
    computers: Optional[int] = Field(None, ge=0)
    projector: Optional[str] = None
    instruments: Optional[str] = None
    status: Optional[LabStatus] = None
    hours: Optional[str] = None


class LabStatusUpdate(BaseModel):
    status: LabStatus


class LabRead(LabCreate):
    id: int

    model_config = {"from_attributes": True}


class BusCreate(BaseModel):
    number: str = Field(..., max_length=20)
    time: str
    route: str
    stops: List[str] = Field(default_factory=list)


class BusUpdate(BaseModel):
    number: Optional[str] = Field(None, max_length=20)
    time: Optional[str] = None
    route: Optional[str] = None
    stops: Optional[List[str]] = None


class BusRead(BusCreate):
    id: int

    model_config = {"from_attributes": True}


class MenuItemCreate(BaseModel):
    name: str = Field(..., max_length=100)
    description: str
    price: float = Field(..., ge=0)
    category: MenuCategory
    availability: MenuAvailability = MenuAvailability.AVAILABLE


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[MenuCategory] = None
    availability: Optional[MenuAvailability] = None


class MenuItemRead(MenuItemCreate):
    id: int

    model_config = {"from_attributes": True}


class CafeteriaInfoUpdate(BaseModel):
    location: str
    contact: str
    hours: str


class CafeteriaInfoRead(CafeteriaInfoUpdate):
    id: Optional[int] = None

    model_config = {"from_attributes": True}


class ScheduleCreate(BaseModel):
    resource_type: ResourceType
    resource_id: int
    day_of_week: DayOfWeek
    start_time: time_type
    end_time: time_type
    subject: str = Field(..., min_length=1, max_length=200)
    instructor: Optional[str] = Field(None, max_length=100)
    course_code: Optional[str] = Field(None, max_length=30)

    @model_validator(mode="after")
    def _valid_range(self) -> "ScheduleCreate":
        _check_time_range(self.start_time, self.end_time)
        return self


class ScheduleUpdate(BaseModel):
    day_of_week: Optional[DayOfWeek] = None
    start_time: Optional[time_type] = None
    end_time: Optional[time_type] = None
    subject: Optional[str] = Field(None, min_length=1, max_length=200)
    instructor: Optional[str] = Field(None, max_length=100)
    course_code: Optional[str] = Field(None, max_length=30)


class ScheduleRead(ScheduleCreate):
    id: int

    model_config = {"from_attributes": True}


class BookingRequestCreate(BaseModel):
    """Submission body; owner and status are never taken from here."""

    resource_type: ResourceType
    resource_id: int
    date: date_type
    start_time: time_type
    end_time: time_type
    program_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    participant_count: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def _valid_range(self) -> "BookingRequestCreate":
        _check_time_range(self.start_time, self.end_time)
        return self


class BookingStatusUpdate(BaseModel):
    status: str
    admin_notes: Optional[str] = Field(None, validation_alias=AliasChoices("admin_notes", "notes"))


class BookingRequestRead(BaseModel):
    id: int
    user_id: int
    resource_type: ResourceType
    resource_id: int
    date: date_type
    start_time: time_type
    end_time: time_type
    program_name: str
    description: Optional[str] = None
    participant_count: Optional[int] = None
    status: BookingStatus
    admin_notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    requester_name: Optional[str] = None
    requester_student_id: Optional[str] = None
    resource_name: Optional[str] = None

    model_config = {"from_attributes": True}
