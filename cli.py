"""CLI commands for graduation invitation management."""

import asyncio
from pathlib import Path

import typer

from src.participants.attendance import partition
from src.participants.dtos import (
    ImportFileError,
    InvalidParticipantError,
    ParticipantRole,
    ParticipantUpsertDTO,
    UsernameTakenError,
)
from src.participants.importing import import_participants, read_rows
from src.participants.naming import generate_username_from_name
from src.participants.repository.read_models import SqlParticipantReadModel
from src.participants.repository.write_models import SqlParticipantWriteModel

app = typer.Typer(help="CLI commands for graduation invitation management")


@app.command()
def create_participant(
    display_name: str = typer.Argument(
        ...,
        help="Full name shown on the invitation",
    ),
    username: str = typer.Option(
        None,
        "--username",
        "-u",
        help="Login username (generated from the name when omitted)",
    ),
    salutation: str = typer.Option(
        None,
        "--salutation",
        "-s",
        help="Form of address, e.g. 'Anh' or 'Cô'",
    ),
    dinner: bool = typer.Option(
        False,
        "--dinner/--no-dinner",
        help="Invite the participant to the dinner",
    ),
):
    """Create or update a participant."""
    data = ParticipantUpsertDTO(
        username=username or generate_username_from_name(display_name),
        display_name=display_name,
        salutation=salutation,
        invited_to_dinner=dinner,
    )

    try:
        participant = asyncio.run(SqlParticipantWriteModel().upsert_participant(data))
    except (InvalidParticipantError, UsernameTakenError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Participant saved!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {participant.friendly_name}", fg=typer.colors.BLUE)
    typer.secho(f"  Username: {participant.username}", fg=typer.colors.CYAN)
    typer.secho(f"  ID: {participant.id}", fg=typer.colors.CYAN)
    if participant.invited_to_dinner:
        typer.secho("  Invited to dinner", fg=typer.colors.MAGENTA)


@app.command()
def create_admin(
    username: str = typer.Argument(
        ...,
        help="Organizer login username",
    ),
    display_name: str = typer.Option(
        "Ban tổ chức",
        "--name",
        "-n",
        help="Organizer display name",
    ),
):
    """Create an organizer account that can open the admin dashboard."""
    data = ParticipantUpsertDTO(username=username, display_name=display_name)

    try:
        admin = asyncio.run(SqlParticipantWriteModel().upsert_participant(data, role=ParticipantRole.ADMIN))
    except (InvalidParticipantError, UsernameTakenError) as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Organizer saved!", fg=typer.colors.GREEN)
    typer.secho(f"  Username: {admin.username}", fg=typer.colors.CYAN)


@app.command(name="import-participants")
def import_participants_from_sheet(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Excel file with username, display_name, salutation and invited_to_dinner columns",
    ),
):
    """Import participants from an Excel sheet."""

    async def _import():
        rows = read_rows(path.read_bytes())
        return await import_participants(rows, SqlParticipantReadModel(), SqlParticipantWriteModel())

    try:
        result = asyncio.run(_import())
    except ImportFileError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"Processed {result.processed} rows", fg=typer.colors.GREEN)
    typer.secho(f"  Added: {result.added}", fg=typer.colors.BLUE)
    typer.secho(f"  Updated: {result.updated}", fg=typer.colors.BLUE)


@app.command()
def dashboard():
    """Print ceremony and dinner attendance counts."""
    cohorts = partition(asyncio.run(SqlParticipantReadModel().list_participants()))

    typer.secho(f"Participants: {cohorts.total_participants}", fg=typer.colors.GREEN)
    typer.echo()
    typer.secho("Ceremony", fg=typer.colors.GREEN)
    typer.secho(f"  Attending: {len(cohorts.ceremony_yes)}", fg=typer.colors.BLUE)
    typer.secho(f"  Not attending: {len(cohorts.ceremony_no)}", fg=typer.colors.BLUE)
    typer.secho(f"  No answer: {len(cohorts.ceremony_pending)}", fg=typer.colors.YELLOW)
    typer.echo()
    typer.secho(f"Dinner ({cohorts.dinner_invitees_count} invited)", fg=typer.colors.GREEN)
    typer.secho(f"  Attending: {len(cohorts.dinner_yes)}", fg=typer.colors.BLUE)
    typer.secho(f"  Not attending: {len(cohorts.dinner_no)}", fg=typer.colors.BLUE)
    typer.secho(f"  No answer: {len(cohorts.dinner_pending)}", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
