"""Signed session cookie shared by participant and organizer logins."""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from fastapi import Depends, HTTPException, Request, Response, status
from jose import JWTError, jwt

from src.config.settings import settings
from src.models.base import utcnow
from src.participants.dtos import ParticipantDTO, ParticipantRole


@dataclass(frozen=True)
class SessionUser:
    id: UUID
    username: str
    display_name: str
    role: ParticipantRole = ParticipantRole.USER
    salutation: str | None = None

    @property
    def friendly_name(self) -> str:
        salutation = (self.salutation or "").strip()
        return f"{salutation} {self.display_name}" if salutation else self.display_name


def create_session_token(participant: ParticipantDTO) -> str:
    now = utcnow()
    payload = {
        "sub": str(participant.id),
        "username": participant.username,
        "display_name": participant.display_name,
        "salutation": participant.salutation,
        "role": participant.role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.session_max_age_seconds)).timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_session_token(token: str) -> SessionUser | None:
    """Return the session user, or None when the token is invalid or expired."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return SessionUser(
            id=UUID(payload["sub"]),
            username=payload["username"],
            display_name=payload["display_name"],
            role=ParticipantRole(payload["role"]),
            salutation=payload.get("salutation"),
        )
    except (JWTError, KeyError, ValueError):
        return None


def set_session_cookie(response: Response, participant: ParticipantDTO) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(participant),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie_name, path="/")


async def get_session_user(request: Request) -> SessionUser | None:
    """Dependency: the logged-in user, if any."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    return decode_session_token(token)


async def require_participant(user: SessionUser | None = Depends(get_session_user)) -> SessionUser:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Vui lòng đăng nhập")
    return user


async def require_admin(user: SessionUser = Depends(require_participant)) -> SessionUser:
    if user.role is not ParticipantRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Không có quyền truy cập")
    return user
