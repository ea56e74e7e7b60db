"""Organizer spreadsheet import.

The sheet's first row is a header; the columns read are ``username``,
``display_name``, ``salutation`` and ``invited_to_dinner``. Other columns are
ignored.
"""

import logging
import zipfile
from collections.abc import Iterable, Mapping
from io import BytesIO
from typing import IO, Any

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from src.participants.dtos import ImportFileError, ImportResultDTO, ParticipantUpsertDTO
from src.participants.naming import normalize_username

logger = logging.getLogger(__name__)

COLUMNS = ("username", "display_name", "salutation", "invited_to_dinner")


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_invited_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return _cell_text(value).lower() in ("true", "1")


def read_rows(source: bytes | IO[bytes]) -> list[dict[str, Any]]:
    """Read the first worksheet into dicts keyed by header name."""
    if isinstance(source, bytes):
        source = BytesIO(source)
    try:
        workbook = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise ImportFileError(f"Không đọc được file Excel: {e}") from e

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [_cell_text(cell) for cell in header]
        return [
            {key: value for key, value in zip(keys, row) if key}
            for row in rows
            if row is not None
        ]
    finally:
        workbook.close()


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[ParticipantUpsertDTO]:
    """
    Turn raw sheet rows into upsert inputs.
    Rows without a username or display name are skipped; when a username
    appears more than once only its first row is kept.
    """
    unique: dict[str, ParticipantUpsertDTO] = {}
    for row in rows:
        username = normalize_username(_cell_text(row.get("username")))
        display_name = _cell_text(row.get("display_name"))
        if not username or not display_name:
            continue
        if username in unique:
            continue
        unique[username] = ParticipantUpsertDTO(
            username=username,
            display_name=display_name,
            salutation=_cell_text(row.get("salutation")),
            invited_to_dinner=parse_invited_flag(row.get("invited_to_dinner")),
        )
    return list(unique.values())


async def import_participants(
    rows: Iterable[Mapping[str, Any]],
    read_model,
    write_model,
) -> ImportResultDTO:
    """Upsert every normalized row, counting which ones were new."""
    participants = normalize_rows(rows)
    existing = {p.username: p for p in await read_model.list_participants()}

    added = 0
    updated = 0
    for participant in participants:
        current = existing.get(participant.username)
        await write_model.upsert_participant(
            ParticipantUpsertDTO(
                id=current.id if current else None,
                username=participant.username,
                display_name=participant.display_name,
                salutation=participant.salutation,
                invited_to_dinner=participant.invited_to_dinner,
            )
        )
        if current:
            updated += 1
        else:
            added += 1

    logger.info("Imported %s participants (%s added, %s updated)", len(participants), added, updated)
    return ImportResultDTO(processed=len(participants), added=added, updated=updated)
