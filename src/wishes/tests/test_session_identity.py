import re
from uuid import uuid4

from src.wishes.session_identity import (
    SessionIdentity,
    mint_browser_session_id,
    reaction_session_id,
)


def test_mint_browser_session_id_format():
    session_id = mint_browser_session_id(now_ms=1717200000000)

    assert re.fullmatch(r"session_1717200000000_[0-9a-z]{9}", session_id)


def test_minted_ids_differ():
    assert mint_browser_session_id() != mint_browser_session_id()


def test_reaction_session_id_for_anonymous_visitor():
    assert reaction_session_id("session_1_abc") == "session_1_abc"


def test_reaction_session_id_for_logged_in_participant():
    participant_id = uuid4()

    identity = SessionIdentity(browser_session_id="session_1_abc", participant_id=participant_id)

    assert identity.session_id == f"{participant_id}-session_1_abc"
