"""
Pydantic models for handbook sections.

A section is an editable block of the handbook identified by a unique
slug.  Its ``content`` is free text; the ``footer`` section stores a
JSON document in it, and other sections may embed tagged blocks such
as ``[INFO_BOX]...[/INFO_BOX]`` that the front end renders specially.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


DEFAULT_SECTION_ICON = "fa-file-alt"


class Section(CamelModel):
    id: int
    title: str
    slug: str
    content: str = ""
    icon: str = DEFAULT_SECTION_ICON
    updated_at: datetime


class SectionCreate(CamelModel):
    """Schema for creating a section.

    ``title`` is checked by the service rather than by pydantic so that
    a missing title surfaces as the same ``ValidationError`` as a title
    from which no slug can be derived.
    """

    title: Optional[str] = Field(None, description="Section heading")
    slug: Optional[str] = Field(None, description="URL slug; derived from the title when omitted")
    content: Optional[str] = Field(None, description="Section body")
    icon: Optional[str] = Field(None, description="Font Awesome icon identifier")


class SectionUpdate(CamelModel):
    """Partial update; only fields that are provided are changed."""

    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = None
    icon: Optional[str] = None


class SectionDeleteResult(CamelModel):
    success: bool
    message: str
    deleted_section: Optional[Section] = None
