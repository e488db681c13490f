"""Identity context: resolve the authenticated principal from the session."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from bizpass.core.db import get_db
from bizpass.core.errors import UnauthorizedError
from bizpass.core.logging import get_logger
from bizpass.models import User
from bizpass.models.user_schemas import UserRead

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_USER_KEY = "user_id"


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency returning the signed-in user.

    The identity provider writes ``user_id`` into the signed session; sign-in
    itself happens outside this service.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise UnauthorizedError("Not authenticated")

    try:
        user_uuid = UUID(str(user_id))
    except ValueError:
        logger.warning("auth.invalid_session", user_id=str(user_id))
        raise UnauthorizedError("Invalid user session")

    user = (await db.execute(select(User).where(User.id == user_uuid))).scalar_one_or_none()
    if user is None:
        logger.warning("auth.unknown_user", user_id=str(user_uuid))
        raise UnauthorizedError("User not found")

    return user


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
