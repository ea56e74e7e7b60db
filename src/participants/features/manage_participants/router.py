import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from src.auth.session import require_admin
from src.participants.dtos import (
    EmptySelectionError,
    ImportFileError,
    InvalidParticipantError,
    ParticipantUpsertDTO,
    UsernameTakenError,
)
from src.participants.importing import import_participants, read_rows
from src.participants.naming import generate_username_from_name
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel
from src.participants.repository.write_models import (
    ParticipantWriteModel,
    SqlParticipantWriteModel,
)
from src.participants.schemas import ParticipantRow
from src.participants.urls import ADMIN_IMPORT_PARTICIPANTS_URL, ADMIN_PARTICIPANTS_URL

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


class ParticipantUpsertRequest(BaseModel):
    id: UUID | None = None
    username: str | None = None
    display_name: str
    salutation: str | None = None
    invited_to_dinner: bool = False


class DeleteParticipantsRequest(BaseModel):
    ids: list[str]


class DeleteParticipantsResponse(BaseModel):
    deleted: int


class ImportResultResponse(BaseModel):
    processed: int
    added: int
    updated: int


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


def get_participant_write_model() -> ParticipantWriteModel:
    return SqlParticipantWriteModel()


@router.put(ADMIN_PARTICIPANTS_URL, response_model=ParticipantRow)
async def upsert_participant(
    data: ParticipantUpsertRequest,
    write_model: ParticipantWriteModel = Depends(get_participant_write_model),
) -> ParticipantRow:
    """Create or update a participant. A blank username is derived from the display name."""
    username = (data.username or "").strip() or generate_username_from_name(data.display_name)
    try:
        participant = await write_model.upsert_participant(
            ParticipantUpsertDTO(
                id=data.id,
                username=username,
                display_name=data.display_name,
                salutation=data.salutation,
                invited_to_dinner=data.invited_to_dinner,
            )
        )
    except InvalidParticipantError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UsernameTakenError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ParticipantRow.from_dto(participant)


@router.delete(ADMIN_PARTICIPANTS_URL, response_model=DeleteParticipantsResponse)
async def delete_participants(
    data: DeleteParticipantsRequest,
    write_model: ParticipantWriteModel = Depends(get_participant_write_model),
) -> DeleteParticipantsResponse:
    try:
        ids = [UUID(value) for value in data.ids if value.strip()]
        deleted = await write_model.delete_participants(ids)
    except EmptySelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError:
        raise HTTPException(status_code=400, detail="Mã người tham gia không hợp lệ")
    return DeleteParticipantsResponse(deleted=deleted)


@router.post(ADMIN_IMPORT_PARTICIPANTS_URL, response_model=ImportResultResponse)
async def import_participants_from_excel(
    file: UploadFile = File(...),
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
    write_model: ParticipantWriteModel = Depends(get_participant_write_model),
) -> ImportResultResponse:
    """Upsert every usable row of an uploaded .xlsx sheet."""
    content = await file.read()
    try:
        rows = read_rows(content)
    except ImportFileError as e:
        logger.warning("Rejected participant import %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))

    result = await import_participants(rows, read_model, write_model)
    return ImportResultResponse(processed=result.processed, added=result.added, updated=result.updated)
