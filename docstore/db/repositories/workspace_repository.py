from typing import Optional
import uuid

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docstore.db.models.workspace import WorkspaceMember, WorkspaceRole


class MembershipRepository:
    """Чтение членства в рабочих пространствах"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_role(self, workspace_id: uuid.UUID, user_id: uuid.UUID) -> Optional[WorkspaceRole]:
        """Роль пользователя или None, если он не участник"""
        result = await self.session.execute(
            select(WorkspaceMember.role).where(
                and_(
                    WorkspaceMember.workspace_id == workspace_id,
                    WorkspaceMember.user_id == user_id
                )
            )
        )
        return result.scalar_one_or_none()
