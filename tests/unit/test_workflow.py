"""Unit tests for the booking request workflow and schedule store."""
from datetime import date, time

import pytest

from campus import bookings, repository, schedules
from campus.auth import get_password_hash
from campus.errors import Forbidden, InvalidState, NotFound, ValidationError
from campus.models import BookingStatus, DayOfWeek, ResourceType, RoleEnum, User
from campus.schemas import BookingRequestCreate, Principal


def add_user(db, student_id: str, role: RoleEnum = RoleEnum.STUDENT) -> Principal:
    user = User(student_id=student_id, name=f"User {student_id}", hashed_password=get_password_hash("x" * 8), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return Principal(id=user.id, student_id=user.student_id, name=user.name, role=user.role)


@pytest.fixture()
def people(db_session):
    return {
        "admin": add_user(db_session, "admin", RoleEnum.ADMIN),
        "alice": add_user(db_session, "2021001"),
        "bob": add_user(db_session, "2021002"),
    }


@pytest.fixture()
def room(db_session):
    return repository.classrooms.create(db_session, {"room": "G-101", "dept": "CSE", "floor": "Ground Floor", "capacity": 60})


def request_body(resource_id: int, **overrides) -> BookingRequestCreate:
    data = {
        "resource_type": ResourceType.CLASSROOM,
        "resource_id": resource_id,
        "date": date(2025, 1, 15),
        "start_time": time(10, 0),
        "end_time": time(12, 0),
        "program_name": "Workshop",
    }
    data.update(overrides)
    return BookingRequestCreate(**data)


class TestStatusFilter:
    """Test parsing of the status query value."""

    @pytest.mark.parametrize("value", [None, "", "all"])
    def test_no_filter(self, value):
        assert bookings.parse_status_filter(value) is None

    def test_known_status(self):
        assert bookings.parse_status_filter("approved") == BookingStatus.APPROVED

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            bookings.parse_status_filter("cancelled")


class TestBookingWorkflow:
    """Test submit, review, list and delete transitions."""

    def test_scenario_student_admin_student(self, db_session, people, room):
        """Alice submits, the admin approves, Bob sees it only through the approved filter."""
        created = bookings.create_request(db_session, people["alice"], request_body(room.id))
        assert created.status == BookingStatus.PENDING
        assert created.user_id == people["alice"].id

        reviewed = bookings.review_request(db_session, people["admin"], created.id, "approved", "Enjoy")
        assert reviewed.status == BookingStatus.APPROVED
        assert reviewed.reviewed_by == people["admin"].id
        assert reviewed.reviewed_at is not None
        assert reviewed.admin_notes == "Enjoy"

        assert bookings.list_requests(db_session, people["bob"]) == []
        approved = bookings.list_requests(db_session, people["bob"], status=BookingStatus.APPROVED)
        assert [row.id for row in approved] == [created.id]

        rendered = bookings.present(db_session, approved)[0]
        assert rendered.requester_student_id == "2021001"
        assert rendered.resource_name == "G-101"

    def test_re_review_overwrites_outcome(self, db_session, people, room):
        created = bookings.create_request(db_session, people["alice"], request_body(room.id))
        bookings.review_request(db_session, people["admin"], created.id, "approved")
        reviewed = bookings.review_request(db_session, people["admin"], created.id, "rejected", "Clash")

        assert reviewed.status == BookingStatus.REJECTED
        assert reviewed.admin_notes == "Clash"

    def test_review_requires_admin(self, db_session, people, room):
        created = bookings.create_request(db_session, people["alice"], request_body(room.id))

        with pytest.raises(Forbidden):
            bookings.review_request(db_session, people["alice"], created.id, "approved")

    def test_review_cannot_return_to_pending(self, db_session, people, room):
        created = bookings.create_request(db_session, people["alice"], request_body(room.id))

        with pytest.raises(ValidationError):
            bookings.review_request(db_session, people["admin"], created.id, "pending")

    def test_create_for_missing_resource(self, db_session, people):
        with pytest.raises(NotFound):
            bookings.create_request(db_session, people["alice"], request_body(999))

    def test_get_hidden_from_other_students_until_approved(self, db_session, people, room):
        created = bookings.create_request(db_session, people["alice"], request_body(room.id))

        with pytest.raises(Forbidden):
            bookings.get_request(db_session, people["bob"], created.id)

        bookings.review_request(db_session, people["admin"], created.id, "approved")
        assert bookings.get_request(db_session, people["bob"], created.id).id == created.id

    def test_delete_rules(self, db_session, people, room):
        first = bookings.create_request(db_session, people["alice"], request_body(room.id))
        second = bookings.create_request(db_session, people["alice"], request_body(room.id, date=date(2025, 1, 16)))
        bookings.review_request(db_session, people["admin"], second.id, "rejected")

        with pytest.raises(Forbidden):
            bookings.delete_request(db_session, people["bob"], first.id)
        with pytest.raises(InvalidState):
            bookings.delete_request(db_session, people["alice"], second.id)

        bookings.delete_request(db_session, people["alice"], first.id)
        bookings.delete_request(db_session, people["admin"], second.id)
        assert bookings.list_requests(db_session, people["admin"]) == []

    def test_admin_filters(self, db_session, people, room):
        lab = repository.labs.create(
            db_session,
            {"name": "Physics Lab", "dept": "Physics", "location": "G-015", "computers": 25, "status": "open", "hours": "9-5"},
        )
        bookings.create_request(db_session, people["alice"], request_body(room.id))
        bookings.create_request(db_session, people["bob"], request_body(lab.id, resource_type=ResourceType.LAB))

        assert len(bookings.list_requests(db_session, people["admin"])) == 2
        by_bob = bookings.list_requests(db_session, people["admin"], user_id=people["bob"].id)
        assert [row.resource_type for row in by_bob] == [ResourceType.LAB]
        by_room = bookings.list_requests(
            db_session, people["admin"], resource_type=ResourceType.CLASSROOM, resource_id=room.id
        )
        assert [row.user_id for row in by_room] == [people["alice"].id]


class TestScheduleStore:
    """Test schedule ordering and update validation."""

    def add(self, db, room_id, day, start, end, subject):
        return schedules.create_schedule(
            db,
            {
                "resource_type": ResourceType.CLASSROOM,
                "resource_id": room_id,
                "day_of_week": day,
                "start_time": start,
                "end_time": end,
                "subject": subject,
            },
        )

    def test_calendar_order(self, db_session, room):
        self.add(db_session, room.id, DayOfWeek.SUNDAY, time(9), time(10), "Sun")
        self.add(db_session, room.id, DayOfWeek.FRIDAY, time(9), time(10), "Fri")
        self.add(db_session, room.id, DayOfWeek.MONDAY, time(11), time(12), "Mon late")
        self.add(db_session, room.id, DayOfWeek.MONDAY, time(8), time(9), "Mon early")

        rows = schedules.schedules_for_resource(db_session, ResourceType.CLASSROOM, room.id)
        assert [row.subject for row in rows] == ["Mon early", "Mon late", "Fri", "Sun"]

        mondays = schedules.schedules_for_resource(db_session, ResourceType.CLASSROOM, room.id, DayOfWeek.MONDAY)
        assert len(mondays) == 2

    def test_update_validation(self, db_session, room):
        entry = self.add(db_session, room.id, DayOfWeek.MONDAY, time(8), time(9), "Math")

        with pytest.raises(ValidationError):
            schedules.update_schedule(db_session, entry.id, {})
        with pytest.raises(ValidationError):
            schedules.update_schedule(db_session, entry.id, {"end_time": time(7)})
        with pytest.raises(ValidationError):
            schedules.update_schedule(db_session, entry.id, {"day_of_week": None})
        with pytest.raises(NotFound):
            schedules.update_schedule(db_session, 999, {"subject": "Physics"})

        updated = schedules.update_schedule(db_session, entry.id, {"day_of_week": DayOfWeek.TUESDAY})
        assert updated.day_of_week == DayOfWeek.TUESDAY
