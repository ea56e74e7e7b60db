"""Reaction identity for the current browser.

Each browser carries an opaque id in a long-lived cookie. Logged-in
participants react as ``<participant id>-<browser id>`` so the same person on
two devices counts as two sessions, as anonymous visitors do.
"""

import secrets
import string
import time
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, Request, Response

from src.auth.session import SessionUser, get_session_user
from src.config.settings import settings

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def mint_browser_session_id(now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(9))
    return f"session_{now_ms}_{suffix}"


def reaction_session_id(browser_session_id: str, participant_id: UUID | None = None) -> str:
    if participant_id is None:
        return browser_session_id
    return f"{participant_id}-{browser_session_id}"


@dataclass(frozen=True)
class SessionIdentity:
    browser_session_id: str
    participant_id: UUID | None = None
    display_name: str | None = None

    @property
    def session_id(self) -> str:
        return reaction_session_id(self.browser_session_id, self.participant_id)


async def get_session_identity(
    request: Request,
    response: Response,
    user: SessionUser | None = Depends(get_session_user),
) -> SessionIdentity:
    """Dependency: resolve (or mint and set) the browser id for this request."""
    browser_session_id = request.cookies.get(settings.wish_session_cookie_name)
    if not browser_session_id:
        browser_session_id = mint_browser_session_id()
        response.set_cookie(
            key=settings.wish_session_cookie_name,
            value=browser_session_id,
            max_age=settings.wish_session_max_age_seconds,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
            path="/",
        )

    return SessionIdentity(
        browser_session_id=browser_session_id,
        participant_id=user.id if user else None,
        display_name=user.display_name if user else None,
    )
