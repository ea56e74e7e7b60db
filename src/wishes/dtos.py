from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


class WishNotFoundError(ValueError):
    def __init__(self, wish_id: UUID) -> None:
        self.wish_id = wish_id
        super().__init__(f"Wish with id '{wish_id}' not found")


class UnknownStickerError(ValueError):
    """Raised when a reaction uses a sticker outside the fixed set."""

    def __init__(self, sticker: str) -> None:
        self.sticker = sticker
        super().__init__(f"Sticker '{sticker}' không hợp lệ")


class DuplicateReactionError(Exception):
    """Raised when a session reacts to the same wish with the same sticker twice."""

    def __init__(self, wish_id: UUID, sticker: str) -> None:
        self.wish_id = wish_id
        self.sticker = sticker
        super().__init__("Bạn đã thả cảm xúc này rồi")


@dataclass(frozen=True)
class ReactionDTO:
    wish_id: UUID
    sticker: str
    session_id: str
    reactor_name: str | None = None
    id: UUID | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class WishDTO:
    id: UUID
    name: str
    message: str
    user_id: UUID | None = None
    created_at: datetime | None = None
    reactions: list[ReactionDTO] = field(default_factory=list)


@dataclass
class ReactionDetail:
    """Count of one sticker plus the first distinct reactor names (capped)."""

    count: int = 0
    names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReactionAggregate:
    # Insertion ordered: stickers appear in the order first seen
    by_sticker: dict[str, ReactionDetail] = field(default_factory=dict)
    total_reactions: int = 0
    viewer_stickers: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ReactionSummary:
    top_reactions: list[tuple[str, ReactionDetail]] = field(default_factory=list)
    sentence: str = ""
