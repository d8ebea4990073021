"""Pydantic models for uploaded documents (metadata only)."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class DocumentCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: str = Field(..., min_length=1)


class Document(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    category: str
    # Storage key of the uploaded file inside the upload directory.
    filename: str
    mime_type: str
    uploaded_at: datetime
