from io import BytesIO

import openpyxl
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.participants.dtos import ParticipantRole
from src.participants.features.manage_participants.router import (
    get_participant_read_model,
    get_participant_write_model,
)
from src.participants.tests.inmemory_models import (
    InMemoryParticipantReadModel,
    InMemoryParticipantStore,
    InMemoryParticipantWriteModel,
    make_participant,
)
from src.participants.urls import ADMIN_IMPORT_PARTICIPANTS_URL, ADMIN_PARTICIPANTS_URL

ADMIN = make_participant("admin", role=ParticipantRole.ADMIN)


@pytest.fixture
def store():
    return InMemoryParticipantStore([ADMIN])


@pytest.fixture
def overrides(store):
    read_model = InMemoryParticipantReadModel(store)
    write_model = InMemoryParticipantWriteModel(store)
    return {
        get_participant_read_model: lambda: read_model,
        get_participant_write_model: lambda: write_model,
    }


async def test_create_participant_derives_username(client_factory, session_cookies, overrides, store):
    payload = {"display_name": "Nguyễn Văn An", "salutation": "Anh", "invited_to_dinner": True}

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.put(ADMIN_PARTICIPANTS_URL, json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "annv"
    assert data["friendly_name"] == "Anh Nguyễn Văn An"
    assert data["email"] == "annv@guests.local"
    assert data["ceremony"] == "pending"
    assert data["dinner"] == "pending"


async def test_update_participant_by_id(client_factory, session_cookies, overrides, store):
    existing = make_participant("lan", display_name="Lan")
    store.participants[existing.id] = existing
    payload = {"id": str(existing.id), "username": "LAN", "display_name": " Lan Anh ", "invited_to_dinner": True}

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.put(ADMIN_PARTICIPANTS_URL, json=payload)

    assert response.status_code == 200
    assert store.participants[existing.id].display_name == "Lan Anh"
    assert store.participants[existing.id].invited_to_dinner is True


async def test_upsert_without_any_name_is_rejected(client_factory, session_cookies, overrides):
    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.put(ADMIN_PARTICIPANTS_URL, json={"display_name": "   "})

    assert response.status_code == 400


async def test_delete_participants(client_factory, session_cookies, overrides, store):
    first = make_participant("a")
    second = make_participant("b")
    store.participants.update({first.id: first, second.id: second})
    ids = [str(first.id), "", str(first.id), str(second.id)]

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.request("DELETE", ADMIN_PARTICIPANTS_URL, json={"ids": ids})

    assert response.status_code == 200
    assert response.json() == {"deleted": 2}
    assert list(store.participants) == [ADMIN.id]


async def test_delete_with_empty_selection(client_factory, session_cookies, overrides):
    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.request("DELETE", ADMIN_PARTICIPANTS_URL, json={"ids": ["", "  "]})

    assert response.status_code == 400


async def test_import_participants_from_excel(client_factory, session_cookies, overrides, store):
    existing = make_participant("an", display_name="An")
    store.participants[existing.id] = existing

    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["username", "display_name", "salutation", "invited_to_dinner"])
    sheet.append(["an", "An Nguyễn", "Anh", "true"])
    sheet.append(["binh", "Bình", "", 1])
    sheet.append(["", "no username", "", 0])
    buffer = BytesIO()
    workbook.save(buffer)
    files = {
        "file": (
            "participants.xlsx",
            buffer.getvalue(),
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    }

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.post(ADMIN_IMPORT_PARTICIPANTS_URL, files=files)

    assert response.status_code == 200
    assert response.json() == {"processed": 2, "added": 1, "updated": 1}
    assert store.participants[existing.id].display_name == "An Nguyễn"


async def test_import_rejects_unreadable_file(client_factory, session_cookies, overrides):
    files = {"file": ("participants.xlsx", b"not a workbook", "application/octet-stream")}

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.post(ADMIN_IMPORT_PARTICIPANTS_URL, files=files)

    assert response.status_code == 400


class FailingWriteModel(InMemoryParticipantWriteModel):
    def __init__(self, store: InMemoryParticipantStore, error: Exception):
        super().__init__(store)
        self.error = error

    async def upsert_participant(self, data, role=ParticipantRole.USER):
        raise self.error


@pytest.mark.parametrize(
    "error, status_code",
    [
        (IntegrityError("INSERT INTO app_users", {}, Exception("UNIQUE constraint failed")), 409),
        (OperationalError("SELECT 1", {}, Exception("connection refused")), 503),
    ],
)
async def test_store_errors_are_reported(client_factory, session_cookies, store, error, status_code):
    write_model = FailingWriteModel(store, error)
    overrides = {
        get_participant_read_model: lambda: InMemoryParticipantReadModel(store),
        get_participant_write_model: lambda: write_model,
    }

    async with client_factory(overrides, cookies=session_cookies(ADMIN)) as client:
        response = await client.put(ADMIN_PARTICIPANTS_URL, json={"username": "lan", "display_name": "Lan"})

    assert response.status_code == status_code
    assert response.json()["detail"]
