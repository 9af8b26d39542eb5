from docstore.db.models.document import Document
from docstore.db.models.workspace import WorkspaceMember, WorkspaceRole

__all__ = [
    "Document",
    "WorkspaceMember",
    "WorkspaceRole"
]
