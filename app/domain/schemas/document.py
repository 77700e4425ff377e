"""Pydantic schemas for document metadata. Uploads go to external storage; only the reference is kept."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DocumentCreateRequest(BaseModel):
    project_id: Optional[int] = None
    document_type: str = "other"
    file_name: str = Field(..., min_length=1, max_length=255)
    file_path: str = Field(..., min_length=1, max_length=1024, description="Storage reference")
    file_size: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None


class DocumentResponse(BaseModel):
    id: int
    project_id: Optional[int] = None
    document_type: str
    file_name: str
    file_path: str
    file_size: Optional[int] = None
    description: Optional[str] = None
    uploaded_by: int
    created_at: datetime

    model_config = {"from_attributes": True}
