"""Document (Briefcase) service layer.

Documents are metadata only. The file itself lives at file_url and is never
read or moved by this service.
"""

from uuid import UUID, uuid4

from sqlalchemy import ColumnElement
from sqlalchemy.orm import Session

from soloboss.db.models import Document
from soloboss.errors import ApiErrorCode, NotFoundError
from soloboss.logging import get_logger
from soloboss.schemas.document import CreateDocumentRequest, DocumentOut, UpdateDocumentRequest
from soloboss.services.ownership import (
    UNSET,
    Unset,
    delete_owned,
    insert_owned,
    owned_select,
    update_owned,
)

logger = get_logger(__name__)


def document_not_found() -> NotFoundError:
    return NotFoundError(ApiErrorCode.E_DOCUMENT_NOT_FOUND, "Document not found or access denied")


def create_document(db: Session, caller_id: UUID, req: CreateDocumentRequest) -> DocumentOut:
    """Register document metadata for the caller.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the caller has no user row.
    """
    document = Document(
        id=uuid4(),
        user_id=caller_id,
        name=req.name,
        description=req.description,
        file_url=req.file_url,
        file_type=req.file_type,
        file_size=req.file_size,
        folder_path=req.folder_path,
    )
    insert_owned(db, document)

    logger.info("document_created", document_id=str(document.id), file_type=document.file_type)
    return DocumentOut.model_validate(document)


def list_documents(
    db: Session, caller_id: UUID, folder_path: str | None | Unset = UNSET
) -> list[DocumentOut]:
    """List the caller's documents, newest first.

    folder_path filter:
    - UNSET (default): every document
    - None: only documents with no folder
    - a string: only documents in exactly that folder
    """
    criteria: list[ColumnElement[bool]] = []
    if folder_path is None:
        criteria.append(Document.folder_path.is_(None))
    elif folder_path is not UNSET:
        criteria.append(Document.folder_path == folder_path)

    documents = db.execute(owned_select(Document, caller_id, *criteria)).scalars().all()
    return [DocumentOut.model_validate(document) for document in documents]


def update_document(
    db: Session, caller_id: UUID, document_id: UUID, req: UpdateDocumentRequest
) -> DocumentOut:
    """Apply the fields present in req to one of the caller's documents.

    Raises:
        NotFoundError(E_DOCUMENT_NOT_FOUND): If the document is missing or not the caller's.
    """
    changes = req.changes()
    document = update_owned(db, Document, caller_id, document_id, changes, document_not_found())

    logger.info("document_updated", document_id=str(document_id), fields=sorted(changes))
    return DocumentOut.model_validate(document)


def delete_document(db: Session, caller_id: UUID, document_id: UUID) -> bool:
    """Delete one of the caller's documents. Returns False if nothing matched."""
    deleted = delete_owned(db, Document, caller_id, document_id)
    if deleted:
        logger.info("document_deleted", document_id=str(document_id))
    return deleted
