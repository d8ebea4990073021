"""
Guest apartment booking endpoints for API v1.

The booking manager in the member front end lists bookings, confirms or
cancels them and exports the list without any credentials, so these
routes are public like the rest of the member API.

Static paths (``/availability``, ``/export``, ``/download/...``) are
declared before ``/{booking_id}`` so they are matched first.
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import FileResponse

from ellagarden_api.app.api.dependencies import get_booking_service
from ellagarden_api.app.core.errors import NotFoundError
from ellagarden_api.app.schemas.booking import (
    Booking,
    BookingAvailability,
    BookingCreate,
    BookingExportResult,
    BookingStatusUpdate,
)
from ellagarden_api.app.services.booking_service import BookingService

router = APIRouter()


@router.get("", response_model=List[Booking])
async def list_bookings(service: BookingService = Depends(get_booking_service)) -> List[Booking]:
    return await service.list_bookings()


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Request the guest apartment for a date range.

    Returns HTTP 400 if check-out is not after check-in or if the dates
    overlap an active booking (including a shared boundary day).
    """
    return await service.create_booking(booking_in)


@router.get("/availability", response_model=List[BookingAvailability])
async def get_availability(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingAvailability]:
    """Return the active bookings touching a date range, for the calendar.

    Only dates and status are exposed, never the guest's details.
    """
    bookings = await service.bookings_overlapping(start_date, end_date)
    return [BookingAvailability.model_validate(booking) for booking in bookings]


@router.get("/export", response_model=BookingExportResult)
async def export_bookings(
    request: Request,
    service: BookingService = Depends(get_booking_service),
) -> BookingExportResult:
    """Write a JSON snapshot of all bookings and return its download link."""
    filename = await service.export_bookings()
    return BookingExportResult(
        success=True,
        message="Bokningarna har exporterats",
        file_name=filename,
        download_url=request.app.url_path_for("download_booking_export", filename=filename),
    )


@router.get("/download/{filename}", name="download_booking_export")
async def download_booking_export(
    filename: str,
    service: BookingService = Depends(get_booking_service),
) -> FileResponse:
    path = service.export_path(filename)
    return FileResponse(path, media_type="application/json", filename=filename)


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    booking = await service.get_booking(booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


@router.patch("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Confirm, cancel or reset a booking to pending."""
    booking = await service.update_booking_status(booking_id, update.status)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking
