"""User service - lookups and reputation bookkeeping."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spotmap.database import commit_or_rollback
from spotmap.exceptions import NotFoundError
from spotmap.models import User

USER_NOT_FOUND = "No such user with that id!"


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID) -> User:
        """Get user by ID or raise ``NotFoundError``."""
        result = await self.db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    async def create(self, username: str, reputation: int = 0) -> User:
        """Create a user. Account management proper lives outside spotmap."""
        user = User(username=username, reputation=reputation)
        self.db.add(user)
        await commit_or_rollback(self.db)
        return user

    async def adjust_reputation(self, user_id: UUID, increase: bool) -> None:
        """Add or subtract one reputation point in a single UPDATE."""
        await self.get_by_id(user_id)
        delta = 1 if increase else -1
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(reputation=User.reputation + delta)
            .execution_options(synchronize_session=False)
        )
        await commit_or_rollback(self.db)
