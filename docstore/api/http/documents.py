from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging
import uuid

from docstore.core.auth import get_current_user_id
from docstore.core.db import get_db
from docstore.core.errors import (
    ConflictError, DocumentError, ForbiddenError, NotFoundError, StorageError, ValidationError
)
from docstore.db.repositories.workspace_repository import MembershipRepository
from docstore.domains.documents.entities import Document
from docstore.domains.documents.schemas import (
    DocumentCreate, DocumentMove, DocumentResponse, DocumentTreeNodeResponse, DocumentUpdate
)
from docstore.domains.documents.services import DocumentService
from docstore.domains.documents.tree import DocumentTreeNode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workspaces/{workspace_id}/documents", tags=["documents"])

_ERROR_STATUS = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _http_error(error: DocumentError) -> HTTPException:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")


async def _check_membership(
    db: AsyncSession,
    workspace_id: uuid.UUID,
    user_id: uuid.UUID,
    edit: bool = False
) -> None:
    """Проверка участия в рабочем пространстве.

    Не участник получает тот же 404, что и для несуществующего документа.
    """
    try:
        async with db.begin():
            role = await MembershipRepository(db).get_role(workspace_id, user_id)
    except SQLAlchemyError as e:
        logger.exception("Membership lookup failed")
        raise _http_error(StorageError(str(e))) from e

    if role is None:
        raise _http_error(NotFoundError())
    if edit and not role.can_edit():
        raise _http_error(ForbiddenError())


def _to_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        workspace_id=document.workspace_id,
        path=str(document.path),
        parent_id=document.parent_id,
        title=document.title,
        slug=document.slug,
        content=document.content,
        created_by=document.created_by,
        created_at=document.created_at,
        updated_at=document.updated_at
    )


def _to_tree_response(node: DocumentTreeNode) -> DocumentTreeNodeResponse:
    return DocumentTreeNodeResponse(
        document=_to_response(node.document),
        children=[_to_tree_response(child) for child in node.children]
    )


@router.get("/", response_model=List[DocumentResponse])
async def list_documents(
    workspace_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Список документов в порядке обхода дерева"""
    await _check_membership(db, workspace_id, user_id)

    try:
        documents = await DocumentService(db).list_documents(workspace_id)
    except DocumentError as e:
        raise _http_error(e) from e

    return [_to_response(doc) for doc in documents]


@router.get("/tree", response_model=List[DocumentTreeNodeResponse])
async def get_document_tree(
    workspace_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Вложенное дерево документов"""
    await _check_membership(db, workspace_id, user_id)

    try:
        roots = await DocumentService(db).get_tree(workspace_id)
    except DocumentError as e:
        raise _http_error(e) from e

    return [_to_tree_response(node) for node in roots]


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    workspace_id: uuid.UUID,
    document_data: DocumentCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    await _check_membership(db, workspace_id, user_id, edit=True)

    try:
        document = await DocumentService(db).create_document(
            workspace_id,
            title=document_data.title,
            created_by=user_id,
            parent_id=document_data.parent_id,
            content=document_data.content
        )
    except DocumentError as e:
        raise _http_error(e) from e

    return _to_response(document)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    workspace_id: uuid.UUID,
    document_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа по id"""
    await _check_membership(db, workspace_id, user_id)

    try:
        document = await DocumentService(db).get_document(workspace_id, document_id)
    except DocumentError as e:
        raise _http_error(e) from e

    return _to_response(document)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    workspace_id: uuid.UUID,
    document_id: uuid.UUID,
    update_data: DocumentUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Обновление заголовка и содержимого"""
    await _check_membership(db, workspace_id, user_id, edit=True)

    try:
        document = await DocumentService(db).update_document(
            workspace_id,
            document_id,
            title=update_data.title,
            content=update_data.content
        )
    except DocumentError as e:
        raise _http_error(e) from e

    return _to_response(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    workspace_id: uuid.UUID,
    document_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа вместе с дочерними"""
    await _check_membership(db, workspace_id, user_id, edit=True)

    try:
        await DocumentService(db).delete_document(workspace_id, document_id)
    except DocumentError as e:
        raise _http_error(e) from e


@router.post("/{document_id}/move", response_model=DocumentResponse)
async def move_document(
    workspace_id: uuid.UUID,
    document_id: uuid.UUID,
    move_data: DocumentMove,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Перемещение документа под другого родителя"""
    await _check_membership(db, workspace_id, user_id, edit=True)

    try:
        document = await DocumentService(db).move_document(
            workspace_id, document_id, new_parent_id=move_data.parent_id
        )
    except DocumentError as e:
        raise _http_error(e) from e

    return _to_response(document)
