from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp
from src.wishes.dtos import ReactionDTO, WishDTO


class Wish(Base, TimeStamp):
    __tablename__ = TableNames.WISHES.value

    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.APP_USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    reactions: Mapped[list["WishReaction"]] = relationship(
        "WishReaction",
        back_populates="wish",
        cascade="all, delete-orphan",
        order_by="WishReaction.created_at",
    )

    def to_dto(self, include_reactions: bool = True) -> WishDTO:
        return WishDTO(
            id=self.uuid,
            user_id=self.user_id,
            name=self.name,
            message=self.message,
            created_at=self.created_at,
            reactions=[reaction.to_dto() for reaction in self.reactions] if include_reactions else [],
        )

    def __repr__(self) -> str:
        return f"<Wish {self.uuid} by {self.name}>"


class WishReaction(Base, TimeStamp):
    __tablename__ = TableNames.WISH_REACTIONS.value

    wish_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WISHES.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sticker: Mapped[str] = mapped_column(String(32), nullable=False)
    # Not unique together with wish_id/sticker: duplicates are rejected by the router
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    reactor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    wish: Mapped[Wish] = relationship("Wish", back_populates="reactions")

    def to_dto(self) -> ReactionDTO:
        return ReactionDTO(
            id=self.uuid,
            wish_id=self.wish_id,
            sticker=self.sticker,
            session_id=self.session_id,
            reactor_name=self.reactor_name,
            created_at=self.created_at,
        )
