"""
Service layer for uploaded documents.

Document metadata lives in the data store; the file contents are kept
by a ``FileStorage`` under a generated unique name.  Deleting a
document removes both.  A failure to remove the file is logged and
otherwise ignored, since the metadata is already gone by then.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple

from ..core.errors import NotFoundError
from ..core.file_storage import FileStorage
from ..core.store import DataStore, utcnow
from ..schemas.document import Document, DocumentCreate


logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class DocumentService:
    """Service for managing document metadata and stored files."""

    def __init__(self, store: DataStore, files: FileStorage) -> None:
        self.store = store
        self.files = files

    async def list_documents(self, category: Optional[str] = None) -> List[Document]:
        documents = list(self.store.documents.values())
        if category:
            documents = [doc for doc in documents if doc.category == category]
        return documents

    async def get_document(self, document_id: int) -> Optional[Document]:
        return self.store.documents.get(document_id)

    async def create_document(
        self,
        data: DocumentCreate,
        stream: BinaryIO,
        original_name: Optional[str],
        mime_type: Optional[str],
    ) -> Document:
        """Store an uploaded file and record its metadata."""
        filename = self.files.save(stream, original_name)
        document = Document(
            id=self.store.next_id("documents"),
            title=data.title,
            description=data.description or "",
            category=data.category,
            filename=filename,
            mime_type=mime_type or DEFAULT_MIME_TYPE,
            uploaded_at=utcnow(),
        )
        self.store.documents[document.id] = document
        logger.info("Uploaded document %s '%s' in category %s", document.id, document.title, document.category)
        return document

    async def get_document_file(self, document_id: int) -> Tuple[Document, Path]:
        """Return the document and the path of its stored file.

        Raises ``NotFoundError`` if either the metadata or the file is
        missing.
        """
        document = self.store.documents.get(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        if not self.files.exists(document.filename):
            raise NotFoundError("File not found")
        return document, self.files.path_for(document.filename)

    async def delete_document(self, document_id: int) -> bool:
        document = self.store.documents.pop(document_id, None)
        if document is None:
            return False
        try:
            self.files.delete(document.filename)
        except (OSError, ValueError):
            logger.exception("Could not remove file %s for document %s", document.filename, document_id)
        logger.info("Deleted document %s", document_id)
        return True
