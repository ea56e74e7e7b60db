from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.auth.session import require_admin
from src.participants.attendance import filter_participants
from src.participants.dtos import CeremonyState, DinnerState, ParticipantGroup
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel
from src.participants.schemas import ParticipantRow
from src.participants.urls import ADMIN_PARTICIPANTS_URL

router = APIRouter(dependencies=[Depends(require_admin)])


class ParticipantListResponse(BaseModel):
    participants: list[ParticipantRow]
    total: int


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


@router.get(ADMIN_PARTICIPANTS_URL, response_model=ParticipantListResponse)
async def list_participants(
    group: ParticipantGroup | None = None,
    ceremony: Literal["all", "yes", "no", "pending"] = "all",
    dinner: Literal["all", "not_invited", "yes", "no", "pending"] = "all",
    q: str | None = None,
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
) -> ParticipantListResponse:
    """
    Participants newest first, filtered by dinner group, ceremony state,
    dinner state and free text. The dinner filter is ignored for the
    not-invited group.
    """
    participants = filter_participants(
        await read_model.list_participants(),
        group=group,
        ceremony=None if ceremony == "all" else CeremonyState(ceremony),
        dinner=None if dinner == "all" else DinnerState(dinner),
        text=q,
    )
    return ParticipantListResponse(
        participants=[ParticipantRow.from_dto(participant) for participant in participants],
        total=len(participants),
    )
