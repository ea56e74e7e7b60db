"""Participant and RSVP write models. Return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.config.database import async_session_manager
from src.participants.dtos import (
    EmptySelectionError,
    InvalidParticipantError,
    NotInvitedToDinnerError,
    ParticipantDTO,
    ParticipantNotFoundError,
    ParticipantRole,
    ParticipantUpsertDTO,
    RSVPDTO,
    UsernameTakenError,
)
from src.participants.naming import fallback_email, normalize_username
from src.participants.repository.orm_models import AppUser, RSVPResponse

logger = logging.getLogger(__name__)


def unique_ids(ids) -> list[UUID]:
    """Drop blanks and duplicates, keeping first-seen order."""
    seen: dict[UUID, None] = {}
    for participant_id in ids:
        if participant_id:
            seen.setdefault(participant_id, None)
    return list(seen)


class ParticipantWriteModel(ABC):
    @abstractmethod
    async def upsert_participant(
        self,
        data: ParticipantUpsertDTO,
        role: ParticipantRole = ParticipantRole.USER,
    ) -> ParticipantDTO:
        """
        Create a participant or update the one matching data.id (or, failing
        that, data.username).
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_participants(self, ids: list[UUID]) -> int:
        """Delete participants (role user) and their RSVPs. Returns the number deleted."""
        raise NotImplementedError

    @abstractmethod
    async def update_profile(self, participant_id: UUID, display_name: str) -> ParticipantDTO | None:
        raise NotImplementedError


class SqlParticipantWriteModel(ParticipantWriteModel):
    """SQL implementation of participant write operations."""

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def _get_user(self, session, column, value, role: ParticipantRole) -> AppUser | None:
        stmt = (
            select(AppUser)
            .options(selectinload(AppUser.rsvp))
            .where(column == value)
            .where(AppUser.role == role)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_participant(
        self,
        data: ParticipantUpsertDTO,
        role: ParticipantRole = ParticipantRole.USER,
    ) -> ParticipantDTO:
        username = normalize_username(data.username)
        display_name = (data.display_name or "").strip() or username
        salutation = (data.salutation or "").strip()

        if not username or not display_name:
            raise InvalidParticipantError()

        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = None
            if data.id:
                user = await self._get_user(session, AppUser.uuid, data.id, role)
            if user is None:
                user = await self._get_user(session, AppUser.username, username, role)

            if user is not None:
                if user.username != username:
                    taken = await session.execute(
                        select(AppUser.uuid).where(AppUser.username == username)
                    )
                    if taken.scalar_one_or_none() is not None:
                        raise UsernameTakenError(username)
                user.username = username
                user.display_name = display_name
                user.salutation = salutation
                user.invited_to_dinner = data.invited_to_dinner
                await session.flush()
                logger.info("Updated participant %s (%s)", username, user.uuid)
                return user.to_dto()

            # The username index spans every role
            taken = await session.execute(select(AppUser.uuid).where(AppUser.username == username))
            if taken.scalar_one_or_none() is not None:
                raise UsernameTakenError(username)

            user = AppUser(
                username=username,
                display_name=display_name,
                salutation=salutation,
                email=fallback_email(username),
                role=role,
                invited_to_dinner=data.invited_to_dinner,
            )
            session.add(user)
            await session.flush()
            logger.info("Created participant %s (%s)", username, user.uuid)
            # A new participant has no RSVP yet
            return user.to_dto(include_rsvp=False)

    async def delete_participants(self, ids: list[UUID]) -> int:
        participant_ids = unique_ids(ids)
        if not participant_ids:
            raise EmptySelectionError()

        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(AppUser)
                .options(selectinload(AppUser.rsvp))
                .where(AppUser.uuid.in_(participant_ids))
                .where(AppUser.role == ParticipantRole.USER)
            )
            result = await session.execute(stmt)
            users = result.scalars().all()
            for user in users:
                await session.delete(user)
            await session.flush()

        logger.info("Deleted %s participants", len(users))
        return len(users)

    async def update_profile(self, participant_id: UUID, display_name: str) -> ParticipantDTO | None:
        display_name = (display_name or "").strip()
        if not display_name:
            raise InvalidParticipantError()

        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await self._get_user(session, AppUser.uuid, participant_id, ParticipantRole.USER)
            if user is None:
                return None
            user.display_name = display_name
            await session.flush()
            return user.to_dto()


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self,
        participant_id: UUID,
        will_attend: bool | None = None,
        will_attend_dinner: bool | None = None,
    ) -> RSVPDTO:
        """
        Record a participant's answers, creating the RSVP on first submission.
        Answers passed as None are left unchanged.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """SQL implementation of RSVP write operations."""

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def submit_rsvp(
        self,
        participant_id: UUID,
        will_attend: bool | None = None,
        will_attend_dinner: bool | None = None,
    ) -> RSVPDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(AppUser)
                .options(selectinload(AppUser.rsvp))
                .where(AppUser.uuid == participant_id)
            )
            result = await session.execute(stmt)
            user = result.scalar_one_or_none()
            if user is None:
                raise ParticipantNotFoundError(str(participant_id))

            if will_attend_dinner is not None and not user.invited_to_dinner:
                raise NotInvitedToDinnerError(participant_id)

            rsvp = user.rsvp
            if rsvp is None:
                rsvp = RSVPResponse(name=user.display_name, email=user.email, phone="")
                user.rsvp = rsvp
            else:
                rsvp.name = user.display_name
                rsvp.email = user.email

            if will_attend is not None:
                rsvp.will_attend = will_attend
            if will_attend_dinner is not None:
                rsvp.will_attend_dinner = will_attend_dinner

            await session.flush()
            await session.refresh(rsvp)
            logger.info(
                "Recorded RSVP for %s: ceremony=%s dinner=%s",
                user.username,
                rsvp.will_attend,
                rsvp.will_attend_dinner,
            )
            return rsvp.to_dto()
