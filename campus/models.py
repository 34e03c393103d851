"""SQLAlchemy models for the campus portal."""
from __future__ import annotations

from datetime import date as date_type, datetime, time as time_type, timezone
from enum import Enum
from typing import List, Optional

from sqlalchemy import Date, DateTime, Enum as SqlEnum, ForeignKey, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum(enum_cls: type[Enum], name: str) -> SqlEnum:
    # persist the lowercase values, not the member names
    return SqlEnum(enum_cls, name=name, native_enum=False, values_callable=lambda members: [m.value for m in members])


class RoleEnum(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class ResourceType(str, Enum):
    CLASSROOM = "classroom"
    LAB = "lab"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LabStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class MenuCategory(str, Enum):
    FOOD = "food"
    SNACKS = "snacks"
    DRINKS = "drinks"


class MenuAvailability(str, Enum):
    AVAILABLE = "available"
    LIMITED = "limited"


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    student_id: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[RoleEnum] = mapped_column(_enum(RoleEnum, "user_role"), default=RoleEnum.STUDENT, index=True)

    booking_requests: Mapped[List["BookingRequest"]] = relationship(
        back_populates="requester", foreign_keys="BookingRequest.user_id"
    )


class Classroom(TimestampMixin, Base):
    __tablename__ = "classrooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    room: Mapped[str] = mapped_column(String(50), unique=True)
    dept: Mapped[str] = mapped_column(String(50), index=True)
    floor: Mapped[str] = mapped_column(String(50), index=True)
    capacity: Mapped[int] = mapped_column(Integer)


class Lab(TimestampMixin, Base):
    __tablename__ = "labs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    dept: Mapped[str] = mapped_column(String(50), index=True)
    location: Mapped[str] = mapped_column(String(255))
    computers: Mapped[int] = mapped_column(Integer)
    projector: Mapped[str] = mapped_column(String(10), default="No")
    instruments: Mapped[str] = mapped_column(Text, default="None")
    status: Mapped[LabStatus] = mapped_column(_enum(LabStatus, "lab_status"), index=True)
    hours: Mapped[str] = mapped_column(String(100))


class Bus(TimestampMixin, Base):
    __tablename__ = "buses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    number: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    time: Mapped[str] = mapped_column(String(20))
    route: Mapped[str] = mapped_column(String(255))

    stop_rows: Mapped[List["BusStop"]] = relationship(
        back_populates="bus", cascade="all, delete-orphan", order_by="BusStop.stop_order"
    )

    @property
    def stops(self) -> list[str]:
        return [stop.stop_name for stop in self.stop_rows]

    @stops.setter
    def stops(self, names: list[str]) -> None:
        self.stop_rows = [BusStop(stop_name=name, stop_order=order) for order, name in enumerate(names, start=1)]


class BusStop(Base):
    __tablename__ = "bus_stops"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    bus_id: Mapped[int] = mapped_column(ForeignKey("buses.id", ondelete="CASCADE"), index=True)
    stop_name: Mapped[str] = mapped_column(String(100))
    stop_order: Mapped[int] = mapped_column(Integer)

    bus: Mapped[Bus] = relationship(back_populates="stop_rows")


class MenuItem(TimestampMixin, Base):
    __tablename__ = "cafeteria_menu"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False))
    category: Mapped[MenuCategory] = mapped_column(_enum(MenuCategory, "menu_category"), index=True)
    availability: Mapped[MenuAvailability] = mapped_column(_enum(MenuAvailability, "menu_availability"), index=True)


class CafeteriaInfo(TimestampMixin, Base):
    __tablename__ = "cafeteria_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    location: Mapped[str] = mapped_column(String(255))
    contact: Mapped[str] = mapped_column(String(100))
    hours: Mapped[str] = mapped_column(String(100))


class ScheduleEntry(TimestampMixin, Base):
    __tablename__ = "schedules"
    __table_args__ = (Index("idx_schedules_resource", "resource_type", "resource_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    resource_type: Mapped[ResourceType] = mapped_column(_enum(ResourceType, "schedule_resource_type"))
    resource_id: Mapped[int] = mapped_column(Integer)
    day_of_week: Mapped[DayOfWeek] = mapped_column(_enum(DayOfWeek, "day_of_week"), index=True)
    start_time: Mapped[time_type] = mapped_column(Time)
    end_time: Mapped[time_type] = mapped_column(Time)
    subject: Mapped[str] = mapped_column(String(200))
    instructor: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    course_code: Mapped[Optional[str]] = mapped_column(String(30), default=None)


class BookingRequest(TimestampMixin, Base):
    __tablename__ = "booking_requests"
    __table_args__ = (Index("idx_booking_requests_resource", "resource_type", "resource_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    resource_type: Mapped[ResourceType] = mapped_column(_enum(ResourceType, "booking_resource_type"))
    resource_id: Mapped[int] = mapped_column(Integer)
    date: Mapped[date_type] = mapped_column(Date, index=True)
    start_time: Mapped[time_type] = mapped_column(Time)
    end_time: Mapped[time_type] = mapped_column(Time)
    program_name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, default=None)
    participant_count: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    status: Mapped[BookingStatus] = mapped_column(
        _enum(BookingStatus, "booking_status"), default=BookingStatus.PENDING, index=True
    )
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, default=None)
    reviewed_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), default=None)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, default=None)

    requester: Mapped[User] = relationship(back_populates="booking_requests", foreign_keys=[user_id])
    reviewer: Mapped[Optional[User]] = relationship(foreign_keys=[reviewed_by])

    @property
    def requester_name(self) -> Optional[str]:
        return self.requester.name if self.requester else None

    @property
    def requester_student_id(self) -> Optional[str]:
        return self.requester.student_id if self.requester else None
