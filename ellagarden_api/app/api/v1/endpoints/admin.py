"""
Admin dashboard endpoint for API v1.

The whole router is mounted behind ``require_admin`` in ``router.py``.
"""

from collections import Counter

from fastapi import APIRouter, Depends

from ellagarden_api.app.api.dependencies import get_store
from ellagarden_api.app.core.store import DataStore, utcnow
from ellagarden_api.app.schemas.booking import BookingStatus
from ellagarden_api.app.schemas.system import DashboardRead, DashboardSection

router = APIRouter()


@router.get("/dashboard", response_model=DashboardRead)
async def get_dashboard(store: DataStore = Depends(get_store)) -> DashboardRead:
    """Return counts and a compact section list for the admin start page."""
    status_counts = Counter(booking.status.value for booking in store.bookings.values())
    return DashboardRead(
        total_sections=len(store.sections),
        total_documents=len(store.documents),
        total_bookings=len(store.bookings),
        bookings_by_status={s.value: status_counts.get(s.value, 0) for s in BookingStatus},
        last_updated=utcnow(),
        sections=[DashboardSection.model_validate(section) for section in store.sections.values()],
    )
