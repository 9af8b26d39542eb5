from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, UUID

from docstore.core.db import Base
from docstore.domains.documents.entities import MAX_TITLE_LENGTH


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (
        # последний арбитр коллизий путей при гонках
        UniqueConstraint("workspace_id", "path", name="uq_documents_workspace_path"),
        Index("idx_documents_workspace_slug", "workspace_id", "slug"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True)
    workspace_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    parent_id = Column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )

    # Материализованный путь, например 'engineering.backend.api_design'
    path = Column(Text, nullable=False)

    title = Column(String(MAX_TITLE_LENGTH), nullable=False)
    slug = Column(String(100), nullable=False)
    content = Column(Text, nullable=True)  # Markdown

    created_by = Column(UUID(as_uuid=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
