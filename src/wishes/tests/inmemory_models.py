"""In-memory wish models for testing - no database required."""

from dataclasses import replace
from datetime import datetime, timedelta
from uuid import UUID, uuid4

from src.wishes.dtos import ReactionDTO, WishDTO, WishNotFoundError
from src.wishes.repository.read_models import WishReadModel
from src.wishes.repository.write_models import WishWriteModel

BASE_TIME = datetime(2025, 6, 1, 9, 0, 0)


class InMemoryWishStore:
    def __init__(self):
        self.wishes: dict[UUID, WishDTO] = {}
        self.reactions: list[ReactionDTO] = []
        self._clock = 0

    def tick(self) -> datetime:
        self._clock += 1
        return BASE_TIME + timedelta(minutes=self._clock)


class InMemoryWishReadModel(WishReadModel):
    def __init__(self, store: InMemoryWishStore):
        self._store = store

    def _with_reactions(self, wish: WishDTO) -> WishDTO:
        return replace(wish, reactions=[r for r in self._store.reactions if r.wish_id == wish.id])

    async def list_wishes(self, page: int = 1, limit: int = 10) -> list[WishDTO]:
        wishes = sorted(self._store.wishes.values(), key=lambda w: w.created_at, reverse=True)
        start = (max(page, 1) - 1) * limit
        return [self._with_reactions(wish) for wish in wishes[start : start + limit]]

    async def get_wish(self, wish_id: UUID) -> WishDTO | None:
        wish = self._store.wishes.get(wish_id)
        return self._with_reactions(wish) if wish else None

    async def list_reactions(self, wish_id: UUID, session_id: str | None = None) -> list[ReactionDTO]:
        return [
            r
            for r in self._store.reactions
            if r.wish_id == wish_id and (session_id is None or r.session_id == session_id)
        ]


class InMemoryWishWriteModel(WishWriteModel):
    def __init__(self, store: InMemoryWishStore):
        self._store = store

    async def submit_wish(self, user_id: UUID | None, name: str, message: str) -> WishDTO:
        wish = WishDTO(id=uuid4(), user_id=user_id, name=name, message=message, created_at=self._store.tick())
        self._store.wishes[wish.id] = wish
        return wish

    async def delete_wish(self, wish_id: UUID) -> None:
        if wish_id not in self._store.wishes:
            raise WishNotFoundError(wish_id)
        del self._store.wishes[wish_id]
        self._store.reactions = [r for r in self._store.reactions if r.wish_id != wish_id]

    async def add_reaction(
        self, wish_id: UUID, sticker: str, session_id: str, reactor_name: str | None
    ) -> ReactionDTO:
        if wish_id not in self._store.wishes:
            raise WishNotFoundError(wish_id)
        reaction = ReactionDTO(
            id=uuid4(),
            wish_id=wish_id,
            sticker=sticker,
            session_id=session_id,
            reactor_name=reactor_name,
            created_at=self._store.tick(),
        )
        self._store.reactions.append(reaction)
        return reaction
