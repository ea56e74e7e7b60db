import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.config.database import async_session_manager
from src.wishes.dtos import ReactionDTO, WishDTO, WishNotFoundError
from src.wishes.repository.orm_models import Wish, WishReaction

logger = logging.getLogger(__name__)


class WishWriteModel(ABC):
    @abstractmethod
    async def submit_wish(self, user_id: UUID | None, name: str, message: str) -> WishDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_wish(self, wish_id: UUID) -> None:
        """Delete a wish and its reactions. Raises WishNotFoundError."""
        raise NotImplementedError

    @abstractmethod
    async def add_reaction(
        self, wish_id: UUID, sticker: str, session_id: str, reactor_name: str | None
    ) -> ReactionDTO:
        """Store one reaction. Raises WishNotFoundError."""
        raise NotImplementedError


class SqlWishWriteModel(WishWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def submit_wish(self, user_id: UUID | None, name: str, message: str) -> WishDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            wish = Wish(user_id=user_id, name=name, message=message)
            session.add(wish)
            await session.flush()
            logger.info("Wish %s posted by %s", wish.uuid, name)
            return wish.to_dto(include_reactions=False)

    async def delete_wish(self, wish_id: UUID) -> None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(
                select(Wish)
                .options(selectinload(Wish.reactions))
                .execution_options(populate_existing=True)
                .where(Wish.uuid == wish_id)
            )
            wish = result.scalar_one_or_none()
            if wish is None:
                raise WishNotFoundError(wish_id)
            await session.delete(wish)
            await session.flush()
        logger.info("Wish %s deleted", wish_id)

    async def add_reaction(
        self, wish_id: UUID, sticker: str, session_id: str, reactor_name: str | None
    ) -> ReactionDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            exists = await session.execute(select(Wish.uuid).where(Wish.uuid == wish_id))
            if exists.scalar_one_or_none() is None:
                raise WishNotFoundError(wish_id)

            reaction = WishReaction(
                wish_id=wish_id,
                sticker=sticker,
                session_id=session_id,
                reactor_name=reactor_name,
            )
            session.add(reaction)
            await session.flush()
            logger.info("Reaction %s added to wish %s", sticker, wish_id)
            return reaction.to_dto()
