"""Document (Briefcase) routes.

Routes are transport-only:
- Resolve the caller via get_caller
- Call exactly one service function
- Return success(...) or raise ApiError
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db
from soloboss.auth.middleware import Caller, get_caller
from soloboss.errors import InvalidRequestError
from soloboss.responses import success_response
from soloboss.schemas.document import CreateDocumentRequest, UpdateDocumentRequest
from soloboss.services import documents as documents_service
from soloboss.services.ownership import UNSET

router = APIRouter()


@router.post("/documents", status_code=201)
def create_document(
    body: CreateDocumentRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Register document metadata.

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body (e.g. file_size <= 0, bad file_url)
        - 404 E_USER_NOT_FOUND: Caller has no user row
    """
    result = documents_service.create_document(db, caller.user_id, body)
    return success_response(result.model_dump(mode="json"))


@router.get("/documents")
def list_documents(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
    folder_path: Annotated[str | None, Query(description="Only documents in this folder")] = None,
    unfiled: Annotated[bool, Query(description="Only documents with no folder")] = False,
) -> dict:
    """List the caller's documents, newest first.

    With no parameters every document is returned.

    Errors:
        - 400 E_INVALID_REQUEST: Both folder_path and unfiled=true given
    """
    if unfiled and folder_path is not None:
        raise InvalidRequestError(message="folder_path and unfiled are mutually exclusive")

    if unfiled:
        folder_filter = None
    elif folder_path is not None:
        folder_filter = folder_path
    else:
        folder_filter = UNSET

    result = documents_service.list_documents(db, caller.user_id, folder_path=folder_filter)
    return success_response([document.model_dump(mode="json") for document in result])


@router.patch("/documents/{document_id}")
def update_document(
    document_id: UUID,
    body: UpdateDocumentRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Partially update document metadata (name, description, folder_path).

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body or null name
        - 404 E_DOCUMENT_NOT_FOUND: Document missing or owned by someone else
    """
    result = documents_service.update_document(db, caller.user_id, document_id, body)
    return success_response(result.model_dump(mode="json"))


@router.delete("/documents/{document_id}")
def delete_document(
    document_id: UUID,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Delete a document's metadata. data is false when nothing was deleted."""
    return success_response(documents_service.delete_document(db, caller.user_id, document_id))
