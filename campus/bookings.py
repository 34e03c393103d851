"""Booking request workflow: submission, admin review, visibility and removal.

A request is created ``pending`` and moves to ``approved`` or ``rejected``
only through an admin review. Reviews are not gated on the current status, so
an admin may re-review a request; nothing moves a request back to
``pending``. Owners may withdraw (delete) their own request while it is still
pending; admins may delete any request.

Visibility of a row to a caller is::

    caller is admin OR listing filtered to status=approved OR row owner is caller

Approved requests are public so students can see which slots are taken.
Nothing here checks for overlapping bookings or schedule entries.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload

from .errors import Forbidden, InvalidState, NotFound, ValidationError
from .models import BookingRequest, BookingStatus, ResourceType, utcnow
from .resources import ResourceRef, ensure_resource_exists, resource_names
from .schemas import BookingRequestCreate, BookingRequestRead, Principal

logger = logging.getLogger(__name__)

REVIEW_OUTCOMES = (BookingStatus.APPROVED, BookingStatus.REJECTED)


def parse_status_filter(value: Optional[str]) -> Optional[BookingStatus]:
    """Map a ``status`` query value to a status; ``all`` or blank means no filter."""

    if value is None or value in ("", "all"):
        return None
    try:
        return BookingStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown status '{value}'") from exc


def is_visible(principal: Principal, booking: BookingRequest, status_filter: Optional[BookingStatus] = None) -> bool:
    return (
        principal.is_admin
        or status_filter == BookingStatus.APPROVED
        or booking.user_id == principal.id
    )


def create_request(db: Session, principal: Principal, data: BookingRequestCreate) -> BookingRequest:
    ensure_resource_exists(db, ResourceRef(data.resource_type, data.resource_id))
    booking = BookingRequest(
        **data.model_dump(),
        user_id=principal.id,
        status=BookingStatus.PENDING,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info(
        "Booking request %s submitted by user %s for %s %s on %s",
        booking.id,
        principal.id,
        booking.resource_type.value,
        booking.resource_id,
        booking.date,
    )
    return booking


def list_requests(
    db: Session,
    principal: Principal,
    status: Optional[BookingStatus] = None,
    resource_type: Optional[ResourceType] = None,
    resource_id: Optional[int] = None,
    user_id: Optional[int] = None,
) -> list[BookingRequest]:
    query = db.query(BookingRequest).options(joinedload(BookingRequest.requester))
    if status is not None:
        query = query.filter(BookingRequest.status == status)
    if resource_type is not None:
        query = query.filter(BookingRequest.resource_type == resource_type)
    if resource_id is not None:
        query = query.filter(BookingRequest.resource_id == resource_id)

    if principal.is_admin:
        if user_id is not None:
            query = query.filter(BookingRequest.user_id == user_id)
    elif status != BookingStatus.APPROVED:
        query = query.filter(BookingRequest.user_id == principal.id)

    return query.order_by(BookingRequest.created_at.desc(), BookingRequest.id.desc()).all()


def _load(db: Session, request_id: int) -> BookingRequest:
    booking = db.get(BookingRequest, request_id)
    if booking is None:
        raise NotFound("Booking request not found")
    return booking


def get_request(db: Session, principal: Principal, request_id: int) -> BookingRequest:
    booking = _load(db, request_id)
    if not is_visible(principal, booking, status_filter=booking.status):
        raise Forbidden("Access denied")
    return booking


def review_request(
    db: Session,
    reviewer: Principal,
    request_id: int,
    status: str,
    admin_notes: Optional[str] = None,
) -> BookingRequest:
    if not reviewer.is_admin:
        raise Forbidden("Admin access required")
    if status not in {outcome.value for outcome in REVIEW_OUTCOMES}:
        raise ValidationError("Status must be 'approved' or 'rejected'")

    booking = _load(db, request_id)
    booking.status = BookingStatus(status)
    booking.reviewed_by = reviewer.id
    booking.reviewed_at = utcnow()
    booking.admin_notes = admin_notes
    db.commit()
    db.refresh(booking)
    logger.info("Booking request %s %s by admin %s", booking.id, booking.status.value, reviewer.id)
    return booking


def delete_request(db: Session, principal: Principal, request_id: int) -> None:
    booking = _load(db, request_id)
    if not principal.is_admin:
        if booking.user_id != principal.id:
            raise Forbidden("You can only delete your own booking requests")
        if booking.status != BookingStatus.PENDING:
            raise InvalidState("Only pending booking requests can be deleted")
    db.delete(booking)
    db.commit()
    logger.info("Booking request %s deleted by user %s", request_id, principal.id)


def present(db: Session, bookings: Iterable[BookingRequest]) -> list[BookingRequestRead]:
    """Render rows with requester details and resource display names."""

    bookings = list(bookings)
    names = resource_names(db, (ResourceRef(b.resource_type, b.resource_id) for b in bookings))
    return [
        BookingRequestRead.model_validate(booking).model_copy(
            update={"resource_name": names.get(ResourceRef(booking.resource_type, booking.resource_id))}
        )
        for booking in bookings
    ]
