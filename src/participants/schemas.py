from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.participants.attendance import classify_ceremony, classify_dinner
from src.participants.dtos import CeremonyState, DinnerState, ParticipantDTO, RSVPDTO


class ParticipantRow(BaseModel):
    """A participant as shown in the organizer tables, with both attendance states."""

    id: UUID
    username: str
    display_name: str
    friendly_name: str
    salutation: str | None = None
    email: str
    invited_to_dinner: bool
    ceremony: CeremonyState
    dinner: DinnerState
    created_at: datetime | None = None

    @classmethod
    def from_dto(cls, participant: ParticipantDTO) -> "ParticipantRow":
        return cls(
            id=participant.id,
            username=participant.username,
            display_name=participant.display_name,
            friendly_name=participant.friendly_name,
            salutation=participant.salutation,
            email=participant.email,
            invited_to_dinner=participant.invited_to_dinner,
            ceremony=classify_ceremony(participant.rsvp),
            dinner=classify_dinner(participant),
            created_at=participant.created_at,
        )


class RSVPRow(BaseModel):
    user_id: UUID
    name: str
    email: str
    will_attend: bool | None = None
    will_attend_dinner: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dto(cls, rsvp: RSVPDTO) -> "RSVPRow":
        return cls(
            user_id=rsvp.user_id,
            name=rsvp.name,
            email=rsvp.email,
            will_attend=rsvp.will_attend,
            will_attend_dinner=rsvp.will_attend_dinner,
            created_at=rsvp.created_at,
            updated_at=rsvp.updated_at,
        )
