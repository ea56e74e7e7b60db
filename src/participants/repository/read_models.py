import abc
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.config.database import async_session_manager
from src.participants.dtos import ParticipantDTO, ParticipantRole, RSVPDTO
from src.participants.naming import normalize_username
from src.participants.repository.orm_models import AppUser, RSVPResponse


class ParticipantReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_participants(self) -> list[ParticipantDTO]:
        """
        All participants with role user, newest first.
        Each carries its RSVP when one exists.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_participant(self, participant_id: UUID) -> ParticipantDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def find_by_username(
        self, username: str, role: ParticipantRole = ParticipantRole.USER
    ) -> ParticipantDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_rsvp_responses(self) -> list[RSVPDTO]:
        """All RSVP records, newest first."""
        raise NotImplementedError


class SqlParticipantReadModel(ParticipantReadModel):
    """SQL implementation of the participant read model."""

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_participants(self) -> list[ParticipantDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(AppUser)
                .options(selectinload(AppUser.rsvp))
                .where(AppUser.role == ParticipantRole.USER)
                .order_by(AppUser.created_at.desc())
            )
            result = await session.execute(stmt)
            return [user.to_dto() for user in result.scalars().all()]

    async def get_participant(self, participant_id: UUID) -> ParticipantDTO | None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(AppUser)
                .options(selectinload(AppUser.rsvp))
                .where(AppUser.uuid == participant_id)
            )
            result = await session.execute(stmt)
            user = result.scalar_one_or_none()
            return user.to_dto() if user else None

    async def find_by_username(
        self, username: str, role: ParticipantRole = ParticipantRole.USER
    ) -> ParticipantDTO | None:
        normalized = normalize_username(username)
        if not normalized:
            return None
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(AppUser)
                .options(selectinload(AppUser.rsvp))
                .where(AppUser.username == normalized)
                .where(AppUser.role == role)
            )
            result = await session.execute(stmt)
            user = result.scalar_one_or_none()
            return user.to_dto() if user else None

    async def list_rsvp_responses(self) -> list[RSVPDTO]:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = select(RSVPResponse).order_by(RSVPResponse.created_at.desc())
            result = await session.execute(stmt)
            return [rsvp.to_dto() for rsvp in result.scalars().all()]
