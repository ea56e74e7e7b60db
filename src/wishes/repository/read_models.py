import abc
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.config.database import async_session_manager
from src.wishes.dtos import ReactionDTO, WishDTO
from src.wishes.repository.orm_models import Wish, WishReaction


class WishReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_wishes(self, page: int = 1, limit: int = 10) -> list[WishDTO]:
        """One page of wishes, newest first, each with all of its reactions."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_wish(self, wish_id: UUID) -> WishDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_reactions(self, wish_id: UUID, session_id: str | None = None) -> list[ReactionDTO]:
        """Reactions on a wish in the order they were added, optionally only one session's."""
        raise NotImplementedError


class SqlWishReadModel(WishReadModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_wishes(self, page: int = 1, limit: int = 10) -> list[WishDTO]:
        page = max(page, 1)
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(Wish)
                .options(selectinload(Wish.reactions))
                .execution_options(populate_existing=True)
                .order_by(Wish.created_at.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            result = await session.execute(stmt)
            return [wish.to_dto() for wish in result.scalars().all()]

    async def get_wish(self, wish_id: UUID) -> WishDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(Wish)
                .options(selectinload(Wish.reactions))
                .execution_options(populate_existing=True)
                .where(Wish.uuid == wish_id)
            )
            result = await session.execute(stmt)
            wish = result.scalar_one_or_none()
            return wish.to_dto() if wish else None

    async def list_reactions(self, wish_id: UUID, session_id: str | None = None) -> list[ReactionDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(WishReaction)
                .where(WishReaction.wish_id == wish_id)
                .order_by(WishReaction.created_at)
            )
            if session_id is not None:
                stmt = stmt.where(WishReaction.session_id == session_id)
            result = await session.execute(stmt)
            return [reaction.to_dto() for reaction in result.scalars().all()]
