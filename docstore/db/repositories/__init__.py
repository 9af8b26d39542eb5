from docstore.db.repositories.document_repository import DocumentRepository
from docstore.db.repositories.workspace_repository import MembershipRepository

__all__ = [
    "DocumentRepository",
    "MembershipRepository"
]
