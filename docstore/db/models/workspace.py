from sqlalchemy import Column, Enum, UUID
import enum

from docstore.core.db import Base


class WorkspaceRole(enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    EDITOR = "editor"
    READER = "reader"

    def can_edit(self) -> bool:
        return self in (WorkspaceRole.OWNER, WorkspaceRole.ADMIN, WorkspaceRole.EDITOR)


class WorkspaceMember(Base):
    """Членство в рабочем пространстве, заполняется внешним сервисом"""
    __tablename__ = "workspace_members"

    workspace_id = Column(UUID(as_uuid=True), primary_key=True)
    user_id = Column(UUID(as_uuid=True), primary_key=True)
    role = Column(
        Enum(WorkspaceRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False
    )
