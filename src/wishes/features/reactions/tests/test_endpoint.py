from uuid import uuid4

import pytest

from src.config.settings import settings
from src.participants.tests.inmemory_models import make_participant
from src.wishes.features.reactions.router import get_wish_read_model, get_wish_write_model
from src.wishes.tests.inmemory_models import (
    InMemoryWishReadModel,
    InMemoryWishStore,
    InMemoryWishWriteModel,
)
from src.wishes.urls import WISH_REACTIONS_URL

BROWSER_SESSION = "session_1717200000000_abcdefghi"


@pytest.fixture
def store():
    return InMemoryWishStore()


@pytest.fixture
def overrides(store):
    read_model = InMemoryWishReadModel(store)
    write_model = InMemoryWishWriteModel(store)
    return {
        get_wish_read_model: lambda: read_model,
        get_wish_write_model: lambda: write_model,
    }


@pytest.fixture
async def wish(store):
    return await InMemoryWishWriteModel(store).submit_wish(None, "Bích Phương", "Chúc mừng!")


async def test_anonymous_reaction(client_factory, overrides, store, wish):
    url = WISH_REACTIONS_URL.format(wish_id=wish.id)
    cookies = {settings.wish_session_cookie_name: BROWSER_SESSION}

    async with client_factory(overrides, cookies=cookies) as client:
        response = await client.post(url, json={"sticker": "🎓"})

    assert response.status_code == 201
    data = response.json()
    assert data["total_reactions"] == 1
    assert data["viewer_stickers"] == ["🎓"]
    assert data["sentence"] == "Bạn"
    (reaction,) = store.reactions
    assert reaction.session_id == BROWSER_SESSION
    assert reaction.reactor_name is None


async def test_logged_in_reaction_session_includes_participant(client_factory, session_cookies, overrides, store, wish):
    participant = make_participant("lan", display_name="Lan")
    url = WISH_REACTIONS_URL.format(wish_id=wish.id)
    cookies = {**session_cookies(participant), settings.wish_session_cookie_name: BROWSER_SESSION}

    async with client_factory(overrides, cookies=cookies) as client:
        response = await client.post(url, json={"sticker": "❤️"})

    assert response.status_code == 201
    (reaction,) = store.reactions
    assert reaction.session_id == f"{participant.id}-{BROWSER_SESSION}"
    assert reaction.reactor_name == "Lan"
    assert response.json()["top_reactions"][0]["names"] == ["Lan"]


async def test_same_sticker_twice_is_rejected(client_factory, overrides, store, wish):
    url = WISH_REACTIONS_URL.format(wish_id=wish.id)

    async with client_factory(overrides) as client:
        first = await client.post(url, json={"sticker": "🎉"})
        again = await client.post(url, json={"sticker": "🎉"})
        other = await client.post(url, json={"sticker": "🥂"})

    assert first.status_code == 201
    assert again.status_code == 409
    assert other.status_code == 201
    assert len(store.reactions) == 2
    assert other.json()["viewer_stickers"] == ["🎉", "🥂"]


async def test_unknown_sticker(client_factory, overrides, wish):
    url = WISH_REACTIONS_URL.format(wish_id=wish.id)

    async with client_factory(overrides) as client:
        response = await client.post(url, json={"sticker": "🍕"})

    assert response.status_code == 422


async def test_reaction_on_missing_wish(client_factory, overrides):
    url = WISH_REACTIONS_URL.format(wish_id=uuid4())

    async with client_factory(overrides) as client:
        posted = await client.post(url, json={"sticker": "👍"})
        fetched = await client.get(url)

    assert posted.status_code == 404
    assert fetched.status_code == 404


async def test_get_reactions(client_factory, overrides, store, wish):
    write_model = InMemoryWishWriteModel(store)
    for i in range(12):
        await write_model.add_reaction(wish.id, "👍", f"session_{i}", f"Guest {i}")
    url = WISH_REACTIONS_URL.format(wish_id=wish.id)

    async with client_factory(overrides) as client:
        response = await client.get(url)

    assert response.status_code == 200
    data = response.json()
    assert data["total_reactions"] == 12
    (thumbs,) = data["top_reactions"]
    assert thumbs["count"] == 12
    assert len(thumbs["names"]) == 10
    assert thumbs["tooltip"].endswith(", +2 người khác")
    assert data["sentence"] == "Guest 0, Guest 1 và 8 người khác"
    assert data["viewer_stickers"] == []
