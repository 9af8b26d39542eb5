from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
import uuid
from datetime import datetime


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    title: str
    parent_id: Optional[uuid.UUID] = None
    content: Optional[str] = Field(None, max_length=1000000)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        return v.strip()


class DocumentUpdate(BaseModel):
    """Схема для обновления документа"""
    title: Optional[str] = None
    content: Optional[str] = Field(None, max_length=1000000)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        return v.strip() if v is not None else v


class DocumentMove(BaseModel):
    """Схема для перемещения документа, parent_id=None переносит в корень"""
    parent_id: Optional[uuid.UUID] = None


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    id: uuid.UUID
    workspace_id: uuid.UUID
    path: str
    parent_id: Optional[uuid.UUID] = None
    title: str
    slug: str
    content: Optional[str] = None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime


class DocumentTreeNodeResponse(BaseModel):
    """Узел вложенного дерева документов"""
    document: DocumentResponse
    children: List["DocumentTreeNodeResponse"] = []


DocumentTreeNodeResponse.model_rebuild()
