"""
Handbook section endpoints for API v1.

Reading sections is public.  Creating, updating and deleting them
requires the admin credentials.  The same router is mounted a second
time under ``/admin/sections`` with the admin gate applied to every
route (see ``router.py``).
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ellagarden_api.app.api.dependencies import get_section_service
from ellagarden_api.app.core.errors import NotFoundError
from ellagarden_api.app.core.security import require_admin
from ellagarden_api.app.schemas.section import Section, SectionCreate, SectionDeleteResult, SectionUpdate
from ellagarden_api.app.services.section_service import SectionService

router = APIRouter()

admin_only = [Depends(require_admin)]


@router.get("", response_model=List[Section])
async def list_sections(service: SectionService = Depends(get_section_service)) -> List[Section]:
    """Return all sections in insertion order."""
    return await service.list_sections()


@router.get("/{slug_or_id}", response_model=Section)
async def get_section(slug_or_id: str, service: SectionService = Depends(get_section_service)) -> Section:
    """Retrieve a section by numeric id or by slug."""
    section = await service.get_section(slug_or_id)
    if section is None:
        raise NotFoundError("Section not found")
    return section


@router.post("", response_model=Section, status_code=status.HTTP_201_CREATED, dependencies=admin_only)
async def create_section(
    section_in: SectionCreate,
    service: SectionService = Depends(get_section_service),
) -> Section:
    """Create a section (admin only).

    The slug is derived from the title when omitted.  A taken slug
    returns HTTP 400.
    """
    return await service.create_section(section_in)


@router.patch("/{section_id}", response_model=Section, dependencies=admin_only)
async def update_section(
    section_id: int,
    section_in: SectionUpdate,
    service: SectionService = Depends(get_section_service),
) -> Section:
    """Update the provided fields of a section (admin only)."""
    section = await service.update_section(section_id, section_in)
    if section is None:
        raise NotFoundError("Section not found")
    return section


@router.delete("/{section_id}", response_model=SectionDeleteResult, dependencies=admin_only)
async def delete_section(
    section_id: int,
    service: SectionService = Depends(get_section_service),
) -> SectionDeleteResult:
    """Delete a section (admin only).

    Deleting an unknown id is a no-op reported with ``success: false``.
    Essential sections return HTTP 403.
    """
    section = await service.get_section_by_id(section_id)
    deleted = await service.delete_section(section_id)
    if not deleted:
        return SectionDeleteResult(success=False, message="Section not found")
    return SectionDeleteResult(
        success=True,
        message=f'Section "{section.title}" deleted successfully',
        deleted_section=section,
    )
