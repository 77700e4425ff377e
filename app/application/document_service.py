"""Document metadata application service. Uploaders and admins may delete a document."""

import logging
from typing import Optional

from app.domain.exceptions import NotFoundError
from app.domain.schemas.document import DocumentCreateRequest, DocumentResponse
from app.governance.audit_logger import AuditLogger
from app.governance.audit_models import AuditAction, AuditEntityType
from app.infrastructure.database.document_repository import DocumentRepository
from app.infrastructure.database.models import Document
from app.security.ownership import DOCUMENT_OWNERSHIP
from app.security.rbac import IdentityContext

DOCUMENT_NOT_FOUND_MESSAGE = "Document not found"


class DocumentService:
    def __init__(
        self,
        repository: DocumentRepository,
        audit_logger: AuditLogger,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._audit = audit_logger
        self._logger = logger

    async def list_documents(
        self,
        project_id: Optional[int] = None,
        document_type: Optional[str] = None,
    ) -> list[DocumentResponse]:
        documents = await self._repository.list(project_id=project_id, document_type=document_type)
        return [DocumentResponse.model_validate(d) for d in documents]

    async def get_document(self, document_id: int) -> DocumentResponse:
        document = await self._repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError(DOCUMENT_NOT_FOUND_MESSAGE)
        return DocumentResponse.model_validate(document)

    async def create_document(
        self,
        identity: IdentityContext,
        request: DocumentCreateRequest,
    ) -> DocumentResponse:
        document = await self._repository.create(Document(**request.model_dump(), uploaded_by=identity.id))
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.DOCUMENT,
            entity_id=document.id,
            changes={"file_name": document.file_name, "document_type": document.document_type},
        )
        return DocumentResponse.model_validate(document)

    async def delete_document(self, identity: IdentityContext, document_id: int) -> None:
        document = await self._repository.get_by_id(document_id)
        if document is None:
            raise NotFoundError(DOCUMENT_NOT_FOUND_MESSAGE)
        DOCUMENT_OWNERSHIP.check(identity, document.uploaded_by)

        if not await self._repository.delete(document_id):
            raise NotFoundError(DOCUMENT_NOT_FOUND_MESSAGE)
        self._logger.info("document_deleted", extra={"document_id": document_id})
        self._audit.record(
            user_id=identity.id,
            action=AuditAction.DELETE,
            entity_type=AuditEntityType.DOCUMENT,
            entity_id=document_id,
        )
