from src.participants.features.submit_rsvp.router import get_participant_read_model, get_rsvp_write_model
from src.participants.tests.inmemory_models import (
    InMemoryParticipantReadModel,
    InMemoryParticipantStore,
    InMemoryRSVPWriteModel,
    make_participant,
)
from src.participants.urls import MY_RSVP_URL, SUBMIT_RSVP_URL


def build_overrides(store: InMemoryParticipantStore) -> dict:
    read_model = InMemoryParticipantReadModel(store)
    write_model = InMemoryRSVPWriteModel(store)
    return {
        get_participant_read_model: lambda: read_model,
        get_rsvp_write_model: lambda: write_model,
    }


async def test_submit_ceremony_answer(client_factory, session_cookies):
    participant = make_participant("an")
    store = InMemoryParticipantStore([participant])

    async with client_factory(build_overrides(store), cookies=session_cookies(participant)) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={"will_attend": True})

    assert response.status_code == 200
    data = response.json()
    assert data["will_attend"] is True
    assert data["ceremony"] == "yes"
    assert data["dinner"] == "not_invited"
    assert store.participants[participant.id].rsvp.name == "an"


async def test_dinner_answer_keeps_ceremony_answer(client_factory, session_cookies):
    participant = make_participant("an", invited_to_dinner=True, will_attend=True)
    store = InMemoryParticipantStore([participant])

    async with client_factory(build_overrides(store), cookies=session_cookies(participant)) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={"will_attend_dinner": False})

    assert response.status_code == 200
    data = response.json()
    assert data["ceremony"] == "yes"
    assert data["dinner"] == "no"


async def test_dinner_answer_requires_invitation(client_factory, session_cookies):
    participant = make_participant("an")
    store = InMemoryParticipantStore([participant])

    async with client_factory(build_overrides(store), cookies=session_cookies(participant)) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={"will_attend_dinner": True})

    assert response.status_code == 403
    assert store.participants[participant.id].rsvp is None


async def test_submit_without_answers_is_rejected(client_factory, session_cookies):
    participant = make_participant("an")

    async with client_factory(
        build_overrides(InMemoryParticipantStore([participant])), cookies=session_cookies(participant)
    ) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={})

    assert response.status_code == 422


async def test_submit_requires_login(client_factory):
    async with client_factory(build_overrides(InMemoryParticipantStore())) as client:
        response = await client.post(SUBMIT_RSVP_URL, json={"will_attend": True})

    assert response.status_code == 401


async def test_my_rsvp_without_answers_is_pending(client_factory, session_cookies):
    participant = make_participant("an", invited_to_dinner=True)
    store = InMemoryParticipantStore([participant])

    async with client_factory(build_overrides(store), cookies=session_cookies(participant)) as client:
        response = await client.get(MY_RSVP_URL)

    assert response.status_code == 200
    data = response.json()
    assert data["will_attend"] is None
    assert data["ceremony"] == "pending"
    assert data["dinner"] == "pending"
    assert data["invited_to_dinner"] is True


async def test_my_rsvp_for_removed_participant(client_factory, session_cookies):
    participant = make_participant("an")

    async with client_factory(
        build_overrides(InMemoryParticipantStore()), cookies=session_cookies(participant)
    ) as client:
        response = await client.get(MY_RSVP_URL)

    assert response.status_code == 404
