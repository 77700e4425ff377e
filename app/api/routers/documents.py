"""Documents API router (metadata only)."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentIdentity, get_document_service
from app.application.document_service import DocumentService
from app.domain.schemas.document import DocumentCreateRequest, DocumentResponse

router = APIRouter()

DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    identity: CurrentIdentity,
    document_service: DocumentServiceDep,
    project_id: Optional[int] = None,
    document_type: Optional[str] = None,
):
    return await document_service.list_documents(project_id=project_id, document_type=document_type)


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(
    body: DocumentCreateRequest,
    identity: CurrentIdentity,
    document_service: DocumentServiceDep,
):
    return await document_service.create_document(identity, body)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(document_id: int, identity: CurrentIdentity, document_service: DocumentServiceDep):
    return await document_service.get_document(document_id)


@router.delete("/{document_id}")
async def delete_document(document_id: int, identity: CurrentIdentity, document_service: DocumentServiceDep):
    """Uploader or admin only."""
    await document_service.delete_document(identity, document_id)
    return {"message": "Document deleted successfully"}
