from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp
from src.participants.dtos import ParticipantDTO, ParticipantRole, RSVPDTO


class AppUser(Base, TimeStamp):
    __tablename__ = TableNames.APP_USERS.value

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    salutation: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Placeholder addresses can repeat, see fallback_email
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        Enum(ParticipantRole, name="participant_role_enum", values_callable=lambda x: [e.value for e in x]),
        default=ParticipantRole.USER,
        nullable=False,
        index=True,
    )
    invited_to_dinner: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Login is username-only; kept nullable for a future password flow
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)

    rsvp: Mapped["RSVPResponse | None"] = relationship(
        "RSVPResponse", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def to_dto(self, include_rsvp: bool = True) -> ParticipantDTO:
        rsvp = None
        if include_rsvp and self.rsvp is not None:
            rsvp = self.rsvp.to_dto()
        return ParticipantDTO(
            id=self.uuid,
            username=self.username,
            display_name=self.display_name,
            email=self.email,
            role=ParticipantRole(self.role),
            salutation=self.salutation,
            invited_to_dinner=bool(self.invited_to_dinner),
            rsvp=rsvp,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<AppUser {self.username} ({self.role})>"


class RSVPResponse(Base, TimeStamp):
    __tablename__ = TableNames.RSVP_RESPONSES.value

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.APP_USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    will_attend: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    will_attend_dinner: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    user: Mapped[AppUser] = relationship("AppUser", back_populates="rsvp")

    def to_dto(self) -> RSVPDTO:
        return RSVPDTO(
            id=self.uuid,
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            will_attend=self.will_attend,
            will_attend_dinner=self.will_attend_dinner,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self) -> str:
        return f"<RSVPResponse user={self.user_id} attend={self.will_attend}>"
