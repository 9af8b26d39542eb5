"""Хранилище узлов дерева документов.

Репозиторий не проверяет инварианты дерева и никогда не делает commit:
все методы работают внутри транзакции, открытой вызывающим кодом.
"""

import logging
from datetime import datetime
from typing import List, Optional
import uuid

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docstore.db.models.document import Document as DocumentModel
from docstore.domains.documents.entities import Document
from docstore.domains.documents.paths import PathKey, SEPARATOR

logger = logging.getLogger(__name__)


def _advisory_lock_key(workspace_id: uuid.UUID) -> int:
    # pg_advisory_xact_lock принимает signed bigint
    return int.from_bytes(workspace_id.bytes[:8], "big", signed=True)


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def lock_workspace(self, workspace_id: uuid.UUID, exclusive: bool = True) -> None:
        """Блокировка рабочего пространства до конца текущей транзакции"""
        if self.session.bind.dialect.name != "postgresql":
            # транзакции SQLite открываются через BEGIN IMMEDIATE, см. core.db
            return

        key = _advisory_lock_key(workspace_id)
        if exclusive:
            await self.session.execute(select(func.pg_advisory_xact_lock(key)))
        else:
            await self.session.execute(select(func.pg_advisory_xact_lock_shared(key)))

    async def get_by_id(self, workspace_id: uuid.UUID, document_id: uuid.UUID) -> Optional[Document]:
        """Получение документа по id в пределах рабочего пространства"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(
                and_(
                    DocumentModel.id == document_id,
                    DocumentModel.workspace_id == workspace_id
                )
            )
            .execution_options(populate_existing=True)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_by_path(self, workspace_id: uuid.UUID, path: PathKey) -> Optional[Document]:
        """Получение документа по пути, используется для проверки коллизий"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(
                and_(
                    DocumentModel.workspace_id == workspace_id,
                    DocumentModel.path == str(path)
                )
            )
            .execution_options(populate_existing=True)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def list_subtree(self, workspace_id: uuid.UUID, path: PathKey) -> List[Document]:
        """Узел с путём ``path`` и все его потомки в порядке путей"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(
                and_(
                    DocumentModel.workspace_id == workspace_id,
                    self._subtree_condition(path)
                )
            )
            .execution_options(populate_existing=True)
        )
        return self._ordered(result.scalars().all())

    async def list_workspace(self, workspace_id: uuid.UUID) -> List[Document]:
        """Все документы рабочего пространства в порядке путей"""
        result = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.workspace_id == workspace_id)
            .execution_options(populate_existing=True)
        )
        return self._ordered(result.scalars().all())

    async def insert(self, document: Document) -> Document:
        """Вставка нового документа"""
        db_document = DocumentModel(
            id=document.id,
            workspace_id=document.workspace_id,
            parent_id=document.parent_id,
            path=str(document.path),
            title=document.title,
            slug=document.slug,
            content=document.content,
            created_by=document.created_by,
            created_at=document.created_at,
            updated_at=document.updated_at
        )
        self.session.add(db_document)
        # flush сразу, чтобы нарушение уникальности пути всплыло здесь
        await self.session.flush()
        return document

    async def update_fields(
        self,
        document_id: uuid.UUID,
        updated_at: datetime,
        title: Optional[str] = None,
        content: Optional[str] = None
    ) -> None:
        """Обновление полей без структурного эффекта"""
        values = {"updated_at": updated_at}
        if title is not None:
            values["title"] = title
        if content is not None:
            values["content"] = content

        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    async def update_path(self, document_id: uuid.UUID, path: PathKey, updated_at: datetime) -> None:
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(path=str(path), updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )

    async def update_path_and_parent(
        self,
        document_id: uuid.UUID,
        path: PathKey,
        parent_id: Optional[uuid.UUID],
        updated_at: datetime
    ) -> None:
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(path=str(path), parent_id=parent_id, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )

    async def delete_by_id(self, document_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            delete(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete_subtree(self, workspace_id: uuid.UUID, path: PathKey) -> int:
        """Удаление узла вместе со всем поддеревом, возвращает число строк"""
        result = await self.session.execute(
            delete(DocumentModel)
            .where(
                and_(
                    DocumentModel.workspace_id == workspace_id,
                    self._subtree_condition(path)
                )
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    def _subtree_condition(path: PathKey):
        # '_' в слагах является спецсимволом LIKE, autoescape его экранирует
        return or_(
            DocumentModel.path == str(path),
            DocumentModel.path.startswith(str(path) + SEPARATOR, autoescape=True)
        )

    def _ordered(self, db_documents) -> List[Document]:
        # Сортировка по PathKey, а не по строке: collation базы может
        # игнорировать разделители
        return sorted((self._to_domain(doc) for doc in db_documents), key=lambda d: d.path)

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """Преобразование модели БД в доменную сущность"""
        return Document(
            id=db_document.id,
            workspace_id=db_document.workspace_id,
            parent_id=db_document.parent_id,
            path=PathKey.parse(db_document.path),
            slug=db_document.slug,
            title=db_document.title,
            content=db_document.content,
            created_by=db_document.created_by,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
