from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus import bookings
from campus.database import get_db
from campus.dependencies import get_current_principal, require_admin
from campus.models import ResourceType
from campus.schemas import BookingRequestCreate, BookingRequestRead, BookingStatusUpdate, Message, Principal

router = APIRouter(prefix="/api/booking-requests", tags=["booking-requests"])


@router.post("", response_model=BookingRequestRead, status_code=status.HTTP_201_CREATED)
def create_booking_request(
    request_in: BookingRequestCreate,
    current_user: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> BookingRequestRead:
    booking = bookings.create_request(db, current_user, request_in)
    return bookings.present(db, [booking])[0]


@router.get("", response_model=List[BookingRequestRead])
def list_booking_requests(
    status: Optional[str] = None,
    resource_type: Optional[ResourceType] = None,
    resource_id: Optional[int] = None,
    user_id: Optional[int] = None,
    current_user: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> List[BookingRequestRead]:
    rows = bookings.list_requests(
        db,
        current_user,
        status=bookings.parse_status_filter(status),
        resource_type=resource_type,
        resource_id=resource_id,
        user_id=user_id,
    )
    return bookings.present(db, rows)


@router.get("/{request_id}", response_model=BookingRequestRead)
def get_booking_request(
    request_id: int,
    current_user: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> BookingRequestRead:
    booking = bookings.get_request(db, current_user, request_id)
    return bookings.present(db, [booking])[0]


@router.api_route("/{request_id}/status", methods=["PATCH", "PUT"], response_model=BookingRequestRead)
def review_booking_request(
    request_id: int,
    review: BookingStatusUpdate,
    current_user: Principal = Depends(require_admin),
    db: Session = Depends(get_db),
) -> BookingRequestRead:
    booking = bookings.review_request(db, current_user, request_id, review.status, review.admin_notes)
    return bookings.present(db, [booking])[0]


@router.delete("/{request_id}", response_model=Message)
def delete_booking_request(
    request_id: int,
    current_user: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Message:
    bookings.delete_request(db, current_user, request_id)
    return Message(message="Booking request deleted successfully")
