from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from src.auth.features.login.router import SessionResponse
from src.auth.session import set_session_cookie
from src.auth.urls import REGISTER_URL
from src.participants.dtos import InvalidParticipantError, ParticipantUpsertDTO, UsernameTakenError
from src.participants.naming import normalize_username
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel
from src.participants.repository.write_models import (
    ParticipantWriteModel,
    SqlParticipantWriteModel,
)

router = APIRouter()


class RegisterRequest(BaseModel):
    username: str
    display_name: str
    salutation: str | None = None


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


def get_participant_write_model() -> ParticipantWriteModel:
    return SqlParticipantWriteModel()


@router.post(REGISTER_URL, response_model=SessionResponse, status_code=201)
async def register(
    data: RegisterRequest,
    response: Response,
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
    write_model: ParticipantWriteModel = Depends(get_participant_write_model),
) -> SessionResponse:
    """
    First-login profile creation for a username the organizer did not add.
    Self-registered participants are never invited to the dinner.
    """
    username = normalize_username(data.username)
    if not username:
        raise HTTPException(status_code=400, detail="Vui lòng nhập username")
    if not data.display_name.strip():
        raise HTTPException(status_code=400, detail="Vui lòng nhập họ tên hiển thị.")

    if await read_model.find_by_username(username) is not None:
        raise HTTPException(status_code=409, detail=f"Username '{username}' đã tồn tại")

    try:
        participant = await write_model.upsert_participant(
            ParticipantUpsertDTO(
                username=username,
                display_name=data.display_name,
                salutation=data.salutation,
                invited_to_dinner=False,
            )
        )
    except InvalidParticipantError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UsernameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))

    set_session_cookie(response, participant)
    return SessionResponse.from_user(participant)
