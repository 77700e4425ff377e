"""DB-backed document metadata repository. File contents live in external storage."""

from typing import Optional

from app.infrastructure.database.models import Document
from app.infrastructure.database.repository import AsyncRepository


class DocumentRepository(AsyncRepository[Document]):
    model = Document

    async def list(
        self,
        project_id: Optional[int] = None,
        document_type: Optional[str] = None,
    ) -> list[Document]:
        criteria = []
        if project_id is not None:
            criteria.append(Document.project_id == project_id)
        if document_type is not None:
            criteria.append(Document.document_type == document_type)
        return await self._list(*criteria, order_by=(Document.created_at.desc(), Document.id.desc()))
