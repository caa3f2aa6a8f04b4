"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class MetadataDTO(BaseModel):
    """Metadata document as exposed by the JSON listing."""
    name: str
    type: str
    keywords: List[str]
    briefing: str
    content: Optional[str] = None
    size_bytes: int = Field(alias="sizeBytes")
    source_path: str = Field(alias="sourcePath")

    class Config:
        populate_by_name = True


class StoredFileDTO(BaseModel):
    """Stored file DTO for API responses."""
    id: str = Field(alias="_id")
    filename: str
    content_type: Optional[str] = Field(default=None, alias="contentType")
    length: int
    upload_date: Optional[datetime] = Field(default=None, alias="uploadDate")
    metadata: MetadataDTO

    class Config:
        populate_by_name = True


class FileListPageDTO(BaseModel):
    """Response DTO for the paginated JSON listing."""
    page: int
    page_size: int = Field(alias="pageSize")
    total_docs: int = Field(alias="totalDocs")
    total_pages: int = Field(alias="totalPages")
    files: List[StoredFileDTO]

    class Config:
        populate_by_name = True
