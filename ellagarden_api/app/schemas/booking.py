"""
Pydantic schemas for guest apartment bookings.

A booking reserves the shared guest apartment for the nights between
``check_in_date`` and ``check_out_date``.  Only presence and basic
shape are validated here; date ordering and availability are checked
by ``BookingService``.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingCreate(CamelModel):
    """Schema for a booking request."""

    name: str = Field(..., min_length=1, description="Name of the member making the booking")
    apartment_number: str = Field(..., min_length=1, description="The member's apartment number")
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    check_in_date: date
    check_out_date: date
    guest_count: int = Field(..., description="Number of guests staying in the apartment")
    message: Optional[str] = None
    # Accepted for compatibility with older clients; the service always
    # stores new bookings as confirmed.
    status: Optional[str] = None


class Booking(CamelModel):
    id: int
    name: str
    apartment_number: str
    email: str
    phone: str
    check_in_date: date
    check_out_date: date
    guest_count: int
    message: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime


class BookingStatusUpdate(CamelModel):
    status: str = Field(..., description="One of pending, confirmed or cancelled")


class BookingAvailability(CamelModel):
    """Subset of a booking shown in the public calendar."""

    id: int
    check_in_date: date
    check_out_date: date
    status: BookingStatus


class BookingExportResult(CamelModel):
    success: bool
    message: str
    file_name: str
    download_url: str
