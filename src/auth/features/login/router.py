from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from src.auth.session import (
    SessionUser,
    clear_session_cookie,
    require_participant,
    set_session_cookie,
)
from src.auth.urls import LOGIN_URL, LOGOUT_URL, SESSION_URL
from src.participants.dtos import ParticipantDTO, ParticipantNotFoundError, ParticipantRole
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel

router = APIRouter()


class LoginRequest(BaseModel):
    username: str
    role: ParticipantRole = ParticipantRole.USER


class SessionResponse(BaseModel):
    id: str
    username: str
    display_name: str
    friendly_name: str
    salutation: str | None = None
    role: ParticipantRole

    @classmethod
    def from_user(cls, user: ParticipantDTO | SessionUser) -> "SessionResponse":
        return cls(
            id=str(user.id),
            username=user.username,
            display_name=user.display_name,
            friendly_name=user.friendly_name,
            salutation=user.salutation,
            role=user.role,
        )


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


@router.post(LOGIN_URL, response_model=SessionResponse)
async def login(
    data: LoginRequest,
    response: Response,
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
) -> SessionResponse:
    """
    Log in by username only. Unknown usernames (for the requested role) get 404,
    the participant app then offers self-registration.
    """
    participant = await read_model.find_by_username(data.username, data.role)
    if participant is None:
        raise HTTPException(status_code=404, detail=str(ParticipantNotFoundError(data.username)))

    set_session_cookie(response, participant)
    return SessionResponse.from_user(participant)


@router.get(SESSION_URL, response_model=SessionResponse)
async def get_session(user: SessionUser = Depends(require_participant)) -> SessionResponse:
    return SessionResponse.from_user(user)


@router.post(LOGOUT_URL)
async def logout(response: Response) -> dict:
    clear_session_cookie(response)
    return {"message": "Đã đăng xuất"}
