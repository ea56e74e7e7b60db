from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from src.auth.features.login.router import SessionResponse
from src.auth.session import SessionUser, require_participant, set_session_cookie
from src.auth.urls import PROFILE_URL
from src.participants.dtos import InvalidParticipantError
from src.participants.repository.write_models import (
    ParticipantWriteModel,
    SqlParticipantWriteModel,
)

router = APIRouter()


class ProfileUpdate(BaseModel):
    display_name: str


def get_participant_write_model() -> ParticipantWriteModel:
    return SqlParticipantWriteModel()


@router.patch(PROFILE_URL, response_model=SessionResponse)
async def update_profile(
    data: ProfileUpdate,
    response: Response,
    user: SessionUser = Depends(require_participant),
    write_model: ParticipantWriteModel = Depends(get_participant_write_model),
) -> SessionResponse:
    """Rename the logged-in participant and refresh the session cookie."""
    try:
        participant = await write_model.update_profile(user.id, data.display_name)
    except InvalidParticipantError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if participant is None:
        raise HTTPException(status_code=404, detail="Không tìm thấy người tham gia")

    set_session_cookie(response, participant)
    return SessionResponse.from_user(participant)
