"""
Business logic for guest apartment bookings.

The ``BookingService`` creates bookings after checking the requested
dates against existing bookings, updates booking status and exports
the booking list as a JSON snapshot.

Overlap uses inclusive boundaries: a booking occupies
``[check_in_date, check_out_date]`` and two bookings conflict when
``a.check_in <= b.check_out and a.check_out >= b.check_in``.  A
same-day turnover (one guest checks out the day the next checks in)
therefore counts as a conflict.  Cancelled bookings never block.

The availability check and the insert happen without an ``await`` in
between, so on a single event loop two requests cannot both pass the
check.  Nothing protects against several worker processes sharing one
data directory.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from ..core.store import DataStore, utcnow, write_json_atomic
from ..schemas.booking import Booking, BookingCreate, BookingStatus


logger = logging.getLogger(__name__)

EXPORT_PREFIX = "bookings-export-"

SWEDISH_MONTHS = (
    "januari",
    "februari",
    "mars",
    "april",
    "maj",
    "juni",
    "juli",
    "augusti",
    "september",
    "oktober",
    "november",
    "december",
)


def format_swedish_date(value: date) -> str:
    """Format a date the way it is written in Swedish, e.g. ``1 juni 2024``."""
    return f"{value.day} {SWEDISH_MONTHS[value.month - 1]} {value.year}"


def count_nights(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def export_filename(day: date) -> str:
    return f"{EXPORT_PREFIX}{day.isoformat()}.json"


class BookingService:
    """Service for managing guest apartment bookings."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def list_bookings(self) -> List[Booking]:
        return list(self.store.bookings.values())

    async def get_booking(self, booking_id: int) -> Optional[Booking]:
        return self.store.bookings.get(booking_id)

    async def bookings_overlapping(self, start: date, end: date) -> List[Booking]:
        """Return non-cancelled bookings touching ``[start, end]``.

        Both ends are inclusive, so a booking that checks out on
        ``start`` or checks in on ``end`` is included.
        """
        return [
            booking
            for booking in self.store.bookings.values()
            if booking.check_in_date <= end
            and booking.check_out_date >= start
            and booking.status != BookingStatus.CANCELLED
        ]

    async def create_booking(self, data: BookingCreate) -> Booking:
        """Create a booking for the requested dates.

        Raises ``ValidationError`` if check-out is not after check-in
        and ``ConflictError`` if any active booking overlaps.  New
        bookings are stored as ``confirmed`` whatever status the caller
        sent.  The whole booking list is persisted afterwards; if that
        write fails the booking is dropped again and ``InternalError``
        propagates.
        """
        if data.check_in_date >= data.check_out_date:
            raise ValidationError("Utcheckningsdatumet måste vara efter incheckningsdatumet")

        overlapping = await self.bookings_overlapping(data.check_in_date, data.check_out_date)
        if overlapping:
            logger.info(
                "Rejected booking %s..%s: overlaps booking(s) %s",
                data.check_in_date,
                data.check_out_date,
                ", ".join(str(b.id) for b in overlapping),
            )
            raise ConflictError("Gästlägenheten är inte tillgänglig för de valda datumen")

        booking = Booking(
            id=self.store.next_id("bookings"),
            name=data.name,
            apartment_number=data.apartment_number,
            email=data.email,
            phone=data.phone,
            check_in_date=data.check_in_date,
            check_out_date=data.check_out_date,
            guest_count=data.guest_count,
            message=data.message,
            status=BookingStatus.CONFIRMED,
            created_at=utcnow(),
        )
        with self.store.rollback_on_error("bookings") as bookings:
            bookings[booking.id] = booking
            self.store.save_bookings()
        logger.info(
            "Created booking %s for apartment %s (%s..%s)",
            booking.id,
            booking.apartment_number,
            booking.check_in_date,
            booking.check_out_date,
        )
        return booking

    async def update_booking_status(self, booking_id: int, status: str) -> Optional[Booking]:
        """Set a booking's status; returns ``None`` if the id is unknown."""
        try:
            new_status = BookingStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in BookingStatus)
            raise ValidationError(f"Invalid status '{status}'. Must be one of: {allowed}") from None

        booking = self.store.bookings.get(booking_id)
        if booking is None:
            return None
        updated = booking.model_copy(update={"status": new_status})
        with self.store.rollback_on_error("bookings") as bookings:
            bookings[booking_id] = updated
            self.store.save_bookings()
        logger.info("Booking %s status %s -> %s", booking_id, booking.status.value, new_status.value)
        return updated

    def _export_dir(self) -> Path:
        if self.store.data_dir is None:
            raise InternalError("Booking export requires a data directory")
        return self.store.data_dir

    async def export_bookings(self) -> str:
        """Write a dated JSON snapshot of all bookings.

        Each record carries the stored fields plus Swedish formatted
        dates and the number of nights.  Returns the file name, which
        ``export_path`` resolves again for download.
        """
        records: List[Dict[str, Any]] = []
        for booking in self.store.bookings.values():
            record = booking.model_dump(mode="json", by_alias=True)
            record["formattedCheckIn"] = format_swedish_date(booking.check_in_date)
            record["formattedCheckOut"] = format_swedish_date(booking.check_out_date)
            record["nights"] = count_nights(booking.check_in_date, booking.check_out_date)
            records.append(record)

        # Named after the local calendar day the export was made.
        filename = export_filename(date.today())
        path = self._export_dir() / filename
        try:
            write_json_atomic(path, records)
        except OSError as exc:
            logger.exception("Failed to export bookings to %s", path)
            raise InternalError("Could not export bookings") from exc
        logger.info("Exported %d bookings to %s", len(records), path)
        return filename

    def export_path(self, filename: str) -> Path:
        """Resolve an export file name for download.

        Names containing ``..`` or not ending in ``.json`` are rejected
        with ``ValidationError``; unknown files raise ``NotFoundError``.
        """
        if ".." in filename or "/" in filename or "\\" in filename or not filename.endswith(".json"):
            raise ValidationError("Invalid filename")
        path = self._export_dir() / filename
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

