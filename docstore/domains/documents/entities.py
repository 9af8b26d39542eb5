import uuid
from datetime import datetime, timezone
from typing import Optional

from docstore.domains.documents.paths import PathKey

MAX_TITLE_LENGTH = 300


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document:
    """Узел дерева документов рабочего пространства.

    Связи с другими узлами хранятся только как ``parent_id`` и ``path``,
    живых ссылок между объектами нет.
    """

    def __init__(
        self,
        id: uuid.UUID,
        workspace_id: uuid.UUID,
        path: PathKey,
        slug: str,
        title: str,
        created_by: uuid.UUID,
        parent_id: Optional[uuid.UUID] = None,
        content: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.workspace_id = workspace_id
        self.parent_id = parent_id
        self.path = path
        self.slug = slug
        self.title = title
        self.content = content
        self.created_by = created_by
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    @classmethod
    def create_document(
        cls,
        id: uuid.UUID,
        workspace_id: uuid.UUID,
        slug: str,
        title: str,
        created_by: uuid.UUID,
        now: datetime,
        parent: Optional["Document"] = None,
        content: Optional[str] = None
    ) -> "Document":
        """Создание нового документа под ``parent`` или в корне"""
        path = parent.path.concat(slug) if parent else PathKey.root(slug)
        return cls(
            id=id,
            workspace_id=workspace_id,
            parent_id=parent.id if parent else None,
            path=path,
            slug=slug,
            title=title,
            content=content,
            created_by=created_by,
            created_at=now,
            updated_at=now
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Document(id={self.id}, path={self.path}, title={self.title})"
