"""
Document endpoints for API v1.

Members can list, upload, download and delete documents without
credentials, as the member front end does.  Uploads are multipart
forms with ``title``, ``description``, ``category`` and ``file``
fields.
"""

from pathlib import Path
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse

from ellagarden_api.app.api.dependencies import get_document_service
from ellagarden_api.app.core.errors import NotFoundError, ValidationError
from ellagarden_api.app.schemas.document import Document, DocumentCreate
from ellagarden_api.app.services.document_service import DocumentService

router = APIRouter()


@router.get("", response_model=List[Document])
async def list_documents(
    category: Optional[str] = Query(None, description="Only return documents in this category"),
    service: DocumentService = Depends(get_document_service),
) -> List[Document]:
    return await service.list_documents(category)


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def upload_document(
    title: str = Form(...),
    category: str = Form(...),
    description: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    service: DocumentService = Depends(get_document_service),
) -> Document:
    """Upload a document with its metadata."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    if not title.strip() or not category.strip():
        raise ValidationError("Title and category are required")
    metadata = DocumentCreate(title=title.strip(), description=description, category=category.strip())
    try:
        return await service.create_document(metadata, file.file, file.filename, file.content_type)
    finally:
        await file.close()


@router.get("/{document_id}/file")
async def download_document(
    document_id: int,
    service: DocumentService = Depends(get_document_service),
) -> FileResponse:
    """Stream a document's file as an attachment."""
    document, path = await service.get_document_file(document_id)
    download_name = document.title
    # Keep the stored extension so the download opens with the right program.
    suffix = Path(document.filename).suffix
    if suffix and not download_name.lower().endswith(suffix.lower()):
        download_name += suffix
    return FileResponse(path, media_type=document.mime_type, filename=download_name)


@router.delete("/{document_id}")
async def delete_document(
    document_id: int,
    service: DocumentService = Depends(get_document_service),
) -> Dict[str, str]:
    """Delete a document and its file."""
    deleted = await service.delete_document(document_id)
    if not deleted:
        raise NotFoundError("Document not found")
    return {"message": "Document deleted successfully"}
