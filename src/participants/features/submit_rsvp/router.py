from dataclasses import replace
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.session import SessionUser, require_participant
from src.participants.attendance import classify_ceremony, classify_dinner
from src.participants.dtos import (
    CeremonyState,
    DinnerState,
    NotInvitedToDinnerError,
    ParticipantDTO,
    ParticipantNotFoundError,
)
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel
from src.participants.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from src.participants.urls import MY_RSVP_URL, SUBMIT_RSVP_URL

router = APIRouter()


class RSVPSubmit(BaseModel):
    will_attend: bool | None = None
    will_attend_dinner: bool | None = None


class RSVPStatusResponse(BaseModel):
    will_attend: bool | None = None
    will_attend_dinner: bool | None = None
    invited_to_dinner: bool
    ceremony: CeremonyState
    dinner: DinnerState
    updated_at: datetime | None = None


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


def get_rsvp_write_model() -> RSVPWriteModel:
    return SqlRSVPWriteModel()


def _status(participant: ParticipantDTO) -> RSVPStatusResponse:
    rsvp = participant.rsvp
    return RSVPStatusResponse(
        will_attend=rsvp.will_attend if rsvp else None,
        will_attend_dinner=rsvp.will_attend_dinner if rsvp else None,
        invited_to_dinner=participant.invited_to_dinner,
        ceremony=classify_ceremony(rsvp),
        dinner=classify_dinner(participant),
        updated_at=rsvp.updated_at if rsvp else None,
    )


async def _current_participant(read_model: ParticipantReadModel, user: SessionUser) -> ParticipantDTO:
    participant = await read_model.get_participant(user.id)
    if participant is None:
        raise HTTPException(status_code=404, detail=str(ParticipantNotFoundError(user.username)))
    return participant


@router.post(SUBMIT_RSVP_URL, response_model=RSVPStatusResponse)
async def submit_rsvp(
    data: RSVPSubmit,
    user: SessionUser = Depends(require_participant),
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> RSVPStatusResponse:
    """
    Record the ceremony and/or dinner answer of the logged-in participant.
    Answers left out keep their previous value.
    """
    if data.will_attend is None and data.will_attend_dinner is None:
        raise HTTPException(status_code=422, detail="Vui lòng chọn ít nhất một câu trả lời")

    participant = await _current_participant(read_model, user)
    try:
        rsvp = await write_model.submit_rsvp(
            participant.id,
            will_attend=data.will_attend,
            will_attend_dinner=data.will_attend_dinner,
        )
    except NotInvitedToDinnerError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ParticipantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _status(replace(participant, rsvp=rsvp))


@router.get(MY_RSVP_URL, response_model=RSVPStatusResponse)
async def get_my_rsvp(
    user: SessionUser = Depends(require_participant),
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
) -> RSVPStatusResponse:
    participant = await _current_participant(read_model, user)
    return _status(participant)
