from collections.abc import Iterable
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.wishes.dtos import ReactionDTO, WishDTO
from src.wishes.reactions import aggregate, build_summary, tooltip_text
from src.wishes.session_identity import SessionIdentity


class StickerReactionView(BaseModel):
    sticker: str
    count: int
    names: list[str]
    tooltip: str
    reacted_by_viewer: bool


class ReactionView(BaseModel):
    total_reactions: int
    sentence: str
    top_reactions: list[StickerReactionView]
    viewer_stickers: list[str]

    @classmethod
    def build(cls, reactions: Iterable[ReactionDTO], identity: SessionIdentity) -> "ReactionView":
        result = aggregate(reactions, identity.session_id)
        summary = build_summary(result, identity.display_name)
        return cls(
            total_reactions=result.total_reactions,
            sentence=summary.sentence,
            top_reactions=[
                StickerReactionView(
                    sticker=sticker,
                    count=detail.count,
                    names=list(detail.names),
                    tooltip=tooltip_text(detail),
                    reacted_by_viewer=sticker in result.viewer_stickers,
                )
                for sticker, detail in summary.top_reactions
            ],
            viewer_stickers=[
                sticker for sticker, _ in summary.top_reactions if sticker in result.viewer_stickers
            ],
        )


class WishView(BaseModel):
    id: UUID
    name: str
    message: str
    created_at: datetime | None = None
    reactions: ReactionView

    @classmethod
    def build(cls, wish: WishDTO, identity: SessionIdentity) -> "WishView":
        return cls(
            id=wish.id,
            name=wish.name,
            message=wish.message,
            created_at=wish.created_at,
            reactions=ReactionView.build(wish.reactions, identity),
        )
