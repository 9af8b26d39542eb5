"""Сервис дерева документов.

Каждая операция выполняется ровно в одной транзакции. Перемещение переписывает
пути всего поддерева и берёт эксклюзивную блокировку рабочего пространства,
создание и удаление берут разделяемую. Любое исключение внутри операции, включая
отмену задачи, откатывает транзакцию целиком.
"""

from contextlib import asynccontextmanager
import logging
from datetime import datetime
from typing import Callable, List, Optional
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docstore.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from docstore.db.repositories.document_repository import DocumentRepository
from docstore.domains.documents.entities import MAX_TITLE_LENGTH, Document, utcnow
from docstore.domains.documents.paths import PathKey
from docstore.domains.documents.slugs import slugify
from docstore.domains.documents.tree import DocumentTreeNode, build_tree

logger = logging.getLogger(__name__)


def _check_title(title: Optional[str]) -> None:
    if not title or not title.strip():
        raise ValidationError("Document title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Document title must be at most {MAX_TITLE_LENGTH} characters")


class DocumentService:
    """Сервис для работы с деревом документов"""

    def __init__(
        self,
        session: AsyncSession,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
        clock: Callable[[], datetime] = utcnow
    ):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self._new_id = id_factory
        self._now = clock

    @asynccontextmanager
    async def _transaction(self):
        """Транзакция операции; открытую вызывающим транзакцию не завершает"""
        try:
            if self.session.in_transaction():
                yield
            else:
                async with self.session.begin():
                    yield
        except IntegrityError as e:
            logger.warning(f"Integrity violation, reporting conflict: {e.orig}")
            raise ConflictError() from e
        except SQLAlchemyError as e:
            logger.exception("Storage failure")
            raise StorageError(str(e)) from e

    async def _get_or_404(self, workspace_id: uuid.UUID, document_id: uuid.UUID) -> Document:
        document = await self.document_repository.get_by_id(workspace_id, document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return document

    async def create_document(
        self,
        workspace_id: uuid.UUID,
        title: str,
        created_by: uuid.UUID,
        parent_id: Optional[uuid.UUID] = None,
        content: Optional[str] = None
    ) -> Document:
        """Создание документа в корне или под существующим родителем"""
        async with self._transaction():
            await self.document_repository.lock_workspace(workspace_id, exclusive=False)

            parent = None
            if parent_id is not None:
                parent = await self.document_repository.get_by_id(workspace_id, parent_id)
                if parent is None:
                    raise NotFoundError("Parent document not found in this workspace")

            _check_title(title)
            slug = slugify(title)
            if not slug:
                raise ValidationError("Document title must contain letters or digits")

            document = Document.create_document(
                id=self._new_id(),
                workspace_id=workspace_id,
                slug=slug,
                title=title,
                content=content,
                created_by=created_by,
                now=self._now(),
                parent=parent
            )

            if await self.document_repository.get_by_path(workspace_id, document.path):
                raise ConflictError()

            await self.document_repository.insert(document)

        logger.info(f"Created document {document.id} at '{document.path}' in workspace {workspace_id}")
        return document

    async def get_document(self, workspace_id: uuid.UUID, document_id: uuid.UUID) -> Document:
        async with self._transaction():
            return await self._get_or_404(workspace_id, document_id)

    async def update_document(
        self,
        workspace_id: uuid.UUID,
        document_id: uuid.UUID,
        title: Optional[str] = None,
        content: Optional[str] = None
    ) -> Document:
        """Обновление заголовка и содержимого.

        Слаг и путь при смене заголовка не меняются.
        """
        if title is not None:
            _check_title(title)

        async with self._transaction():
            await self._get_or_404(workspace_id, document_id)
            await self.document_repository.update_fields(
                document_id, updated_at=self._now(), title=title, content=content
            )
            document = await self._get_or_404(workspace_id, document_id)

        logger.info(f"Updated document {document_id} in workspace {workspace_id}")
        return document

    async def move_document(
        self,
        workspace_id: uuid.UUID,
        document_id: uuid.UUID,
        new_parent_id: Optional[uuid.UUID] = None
    ) -> Document:
        """Перенос документа вместе с поддеревом под нового родителя или в корень"""
        async with self._transaction():
            await self.document_repository.lock_workspace(workspace_id, exclusive=True)

            target = await self._get_or_404(workspace_id, document_id)

            if new_parent_id == document_id:
                raise ValidationError("Cannot move document to itself")

            if new_parent_id is not None:
                new_parent = await self.document_repository.get_by_id(workspace_id, new_parent_id)
                if new_parent is None:
                    raise ValidationError("New parent document not found in this workspace")
                # путь до перемещения: потомок не может стать родителем
                if target.path.is_prefix_of(new_parent.path):
                    raise ValidationError("Cannot move document to its own descendant")
                new_path = new_parent.path.concat(target.slug)
            else:
                new_path = PathKey.root(target.slug)

            existing = await self.document_repository.get_by_path(workspace_id, new_path)
            if existing is not None and existing.id != target.id:
                raise ConflictError()

            now = self._now()
            subtree = await self.document_repository.list_subtree(workspace_id, target.path)
            descendants = [doc for doc in subtree if doc.id != target.id]
            for doc in descendants:
                await self.document_repository.update_path(
                    doc.id, doc.path.rebase(target.path, new_path), updated_at=now
                )

            await self.document_repository.update_path_and_parent(
                target.id, new_path, new_parent_id, updated_at=now
            )
            moved = await self._get_or_404(workspace_id, document_id)

        logger.info(
            f"Moved document {document_id} from '{target.path}' to '{new_path}' "
            f"with {len(descendants)} descendants in workspace {workspace_id}"
        )
        return moved

    async def delete_document(self, workspace_id: uuid.UUID, document_id: uuid.UUID) -> None:
        """Удаление документа вместе со всем поддеревом"""
        async with self._transaction():
            await self.document_repository.lock_workspace(workspace_id, exclusive=False)
            document = await self._get_or_404(workspace_id, document_id)
            deleted = await self.document_repository.delete_subtree(workspace_id, document.path)

        logger.info(
            f"Deleted document {document_id} at '{document.path}' ({deleted} rows) "
            f"in workspace {workspace_id}"
        )

    async def list_documents(self, workspace_id: uuid.UUID) -> List[Document]:
        """Все документы рабочего пространства в порядке обхода дерева"""
        async with self._transaction():
            return await self.document_repository.list_workspace(workspace_id)

    async def get_tree(self, workspace_id: uuid.UUID) -> List[DocumentTreeNode]:
        return build_tree(await self.list_documents(workspace_id))
