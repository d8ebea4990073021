"""
Health check and API discovery endpoints.

Both are public and unauthenticated.
"""

from fastapi import APIRouter, Depends

from ellagarden_api.app.api.dependencies import get_settings, get_store
from ellagarden_api.app.core.config import Settings
from ellagarden_api.app.core.store import DataStore, utcnow
from ellagarden_api.app.schemas.system import ApiInfo, HealthRead

router = APIRouter()


@router.get("/health", response_model=HealthRead)
async def health(
    settings: Settings = Depends(get_settings),
    store: DataStore = Depends(get_store),
) -> HealthRead:
    return HealthRead(
        status="ok",
        environment=settings.environment,
        timestamp=utcnow(),
        sections=len(store.sections),
    )


@router.get("/", response_model=ApiInfo)
async def api_info(settings: Settings = Depends(get_settings)) -> ApiInfo:
    return ApiInfo(
        api=settings.project_name,
        version=settings.api_version,
        endpoints=[
            "/sections (GET, POST)",
            "/sections/:slugOrId (GET)",
            "/sections/:id (PATCH, DELETE)",
            "/documents (GET, POST)",
            "/documents/:id/file (GET)",
            "/documents/:id (DELETE)",
            "/bookings (GET, POST)",
            "/bookings/availability (GET)",
            "/bookings/export (GET)",
            "/bookings/:id/status (PATCH)",
            "/admin/sections (GET, POST, PATCH, DELETE)",
            "/admin/dashboard (GET)",
            "/health (GET)",
        ],
    )
