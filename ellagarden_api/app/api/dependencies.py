"""
FastAPI dependencies providing services to route handlers.

The data store, file storage and settings are attached to
``app.state`` by ``create_app`` (or by the lifespan handler when no
store was injected), so every request works on the objects owned by
its own application instance.
"""

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.errors import InternalError
from ..core.file_storage import FileStorage
from ..core.store import DataStore
from ..services.booking_service import BookingService
from ..services.document_service import DocumentService
from ..services.section_service import SectionService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DataStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise InternalError("Data store is not initialised")
    return store


def get_file_storage(request: Request) -> FileStorage:
    return request.app.state.files


def get_section_service(store: DataStore = Depends(get_store)) -> SectionService:
    return SectionService(store)


def get_booking_service(store: DataStore = Depends(get_store)) -> BookingService:
    return BookingService(store)


def get_document_service(
    store: DataStore = Depends(get_store),
    files: FileStorage = Depends(get_file_storage),
) -> DocumentService:
    return DocumentService(store, files)
