"""
User administration API endpoints
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser
from app.core.database import get_db
from app.schemas.base import MessageResponse
from app.services import accounts

router = APIRouter(prefix="/users", tags=["users"])


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: Annotated[int, Path(description="User ID")],
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """
    Delete an account together with its artworks and galleries (admin only).

    Stored images of the removed artworks are deleted best-effort.
    """
    removed = await accounts.delete_account(db, current_user, user_id)
    return MessageResponse(message=f"User deleted successfully ({removed} artworks removed)")
