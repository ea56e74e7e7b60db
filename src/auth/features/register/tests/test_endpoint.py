import pytest

from src.auth.features.register.router import get_participant_read_model, get_participant_write_model
from src.auth.urls import REGISTER_URL
from src.participants.dtos import ParticipantRole
from src.participants.tests.inmemory_models import (
    InMemoryParticipantReadModel,
    InMemoryParticipantStore,
    InMemoryParticipantWriteModel,
    make_participant,
)


@pytest.fixture
def store():
    return InMemoryParticipantStore()


@pytest.fixture
def overrides(store):
    read_model = InMemoryParticipantReadModel(store)
    write_model = InMemoryParticipantWriteModel(store)
    return {
        get_participant_read_model: lambda: read_model,
        get_participant_write_model: lambda: write_model,
    }


async def test_register_creates_uninvited_participant(client_factory, overrides, store):
    payload = {"username": " Lan ", "display_name": " Nguyễn Thị Lan ", "salutation": "Chị"}

    async with client_factory(overrides) as client:
        response = await client.post(REGISTER_URL, json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "lan"
    assert data["friendly_name"] == "Chị Nguyễn Thị Lan"
    assert "user_session" in response.cookies
    (participant,) = store.participants.values()
    assert participant.invited_to_dinner is False


async def test_register_requires_display_name(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(REGISTER_URL, json={"username": "lan", "display_name": "  "})

    assert response.status_code == 400


async def test_register_existing_username(client_factory, overrides, store):
    existing = make_participant("lan", invited_to_dinner=True)
    store.participants[existing.id] = existing

    async with client_factory(overrides) as client:
        response = await client.post(REGISTER_URL, json={"username": "LAN", "display_name": "Lan"})

    assert response.status_code == 409
    assert store.participants[existing.id].invited_to_dinner is True


async def test_register_username_of_an_organizer(client_factory, overrides, store):
    organizer = make_participant("minh", role=ParticipantRole.ADMIN)
    store.participants[organizer.id] = organizer

    async with client_factory(overrides) as client:
        response = await client.post(REGISTER_URL, json={"username": "minh", "display_name": "Minh"})

    assert response.status_code == 409
    assert list(store.participants) == [organizer.id]
    assert "user_session" not in response.cookies
