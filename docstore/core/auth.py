import uuid

from fastapi import Header, HTTPException, status


async def get_current_user_id(x_user_id: str = Header(None)) -> uuid.UUID:
    """Идентификатор пользователя, проставленный шлюзом аутентификации"""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    try:
        return uuid.UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user id")
