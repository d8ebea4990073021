"""
Service layer for handbook sections.

Sections are the editable information blocks of the handbook.  Slugs
are unique across all sections and are derived from the title when a
caller does not supply one.  A few sections are essential to the site
(the guest apartment page, the association overview and the board
page) and can never be deleted.

Every mutation is written through to the store's ``sections.json``
and undone in memory if that write fails.
"""

import logging
import re
from typing import List, Optional

from ..core.errors import ConflictError, ForbiddenError, ValidationError
from ..core.store import DataStore, utcnow
from ..schemas.section import DEFAULT_SECTION_ICON, Section, SectionCreate, SectionUpdate


logger = logging.getLogger(__name__)

PROTECTED_SLUGS = frozenset({"gastlagenhet", "ellagarden", "styrelse"})

_TRANSLITERATION = str.maketrans({"å": "a", "ä": "a", "ö": "o"})
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Build a URL slug from a section title.

    >>> slugify("Gästlägenhet & Övernattning")
    'gastlagenhet-overnattning'
    """
    lowered = title.lower().translate(_TRANSLITERATION)
    return _NON_ALNUM.sub("-", lowered).strip("-")


class SectionService:
    """CRUD operations over the sections held in a ``DataStore``."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def list_sections(self) -> List[Section]:
        return list(self.store.sections.values())

    async def get_section_by_id(self, section_id: int) -> Optional[Section]:
        return self.store.sections.get(section_id)

    async def get_section_by_slug(self, slug: str) -> Optional[Section]:
        for section in self.store.sections.values():
            if section.slug == slug:
                return section
        return None

    async def get_section(self, slug_or_id: str) -> Optional[Section]:
        """Look a section up by numeric id, falling back to its slug."""
        if slug_or_id.isdecimal():
            section = await self.get_section_by_id(int(slug_or_id))
            if section is not None:
                return section
        return await self.get_section_by_slug(slug_or_id)

    def _slug_taken(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        return any(
            section.slug == slug and section.id != exclude_id
            for section in self.store.sections.values()
        )

    async def create_section(self, data: SectionCreate) -> Section:
        """Create a new section.

        Raises ``ValidationError`` when the title is missing or no slug
        can be derived from it, and ``ConflictError`` when the slug is
        already used by another section.
        """
        title = (data.title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        slug = data.slug or slugify(title)
        if not slug:
            raise ValidationError("Slug is required")
        if self._slug_taken(slug):
            raise ConflictError(f"A section with slug '{slug}' already exists")

        section = Section(
            id=self.store.next_id("sections"),
            title=title,
            slug=slug,
            content=data.content or "",
            icon=data.icon or DEFAULT_SECTION_ICON,
            updated_at=utcnow(),
        )
        with self.store.rollback_on_error("sections") as sections:
            sections[section.id] = section
            self.store.save_sections()
        logger.info("Created section %s (%s)", section.id, section.slug)
        return section

    async def update_section(self, section_id: int, data: SectionUpdate) -> Optional[Section]:
        """Apply a partial update; returns ``None`` if the id is unknown.

        ``updated_at`` is refreshed on every successful call, even when
        no field actually changed.
        """
        section = self.store.sections.get(section_id)
        if section is None:
            return None

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != section.slug and self._slug_taken(new_slug, exclude_id=section_id):
            raise ConflictError(f"A section with slug '{new_slug}' already exists")

        updated = section.model_copy(update={**changes, "updated_at": utcnow()})
        with self.store.rollback_on_error("sections") as sections:
            sections[section_id] = updated
            self.store.save_sections()
        logger.info("Updated section %s (fields: %s)", section_id, ", ".join(sorted(changes)) or "none")
        return updated

    async def delete_section(self, section_id: int) -> bool:
        """Delete a section.

        Returns ``False`` if no section has the id.  Raises
        ``ForbiddenError`` for the essential sections.
        """
        section = self.store.sections.get(section_id)
        if section is None:
            return False
        if section.slug in PROTECTED_SLUGS:
            raise ForbiddenError(f"Section '{section.title}' is essential and cannot be deleted")
        with self.store.rollback_on_error("sections") as sections:
            del sections[section_id]
            self.store.save_sections()
        logger.info("Deleted section %s (%s)", section_id, section.slug)
        return True
