from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.auth.session import require_admin
from src.config.settings import settings
from src.participants.features.dashboard.refresher import DashboardRefresher, dashboard_refresher
from src.participants.repository.read_models import ParticipantReadModel, SqlParticipantReadModel
from src.participants.schemas import ParticipantRow, RSVPRow
from src.participants.urls import ADMIN_DASHBOARD_URL

router = APIRouter(dependencies=[Depends(require_admin)])


class DashboardCounts(BaseModel):
    total_participants: int
    total_responses: int
    total_confirmed: int
    total_declined: int
    total_pending: int
    attendance_rate: int
    dinner_yes_count: int
    dinner_invitees_count: int


class DashboardCohorts(BaseModel):
    ceremony_yes: list[ParticipantRow]
    ceremony_no: list[ParticipantRow]
    ceremony_pending: list[ParticipantRow]
    dinner_yes: list[ParticipantRow]
    dinner_no: list[ParticipantRow]
    dinner_pending: list[ParticipantRow]
    dinner_not_invited: list[ParticipantRow]


class DashboardResponse(BaseModel):
    counts: DashboardCounts
    cohorts: DashboardCohorts
    recent_updates: list[RSVPRow]
    refreshed_at: datetime | None = None


def get_participant_read_model() -> ParticipantReadModel:
    return SqlParticipantReadModel()


def get_dashboard_refresher() -> DashboardRefresher:
    return dashboard_refresher


@router.get(ADMIN_DASHBOARD_URL, response_model=DashboardResponse)
async def get_dashboard(
    read_model: ParticipantReadModel = Depends(get_participant_read_model),
    refresher: DashboardRefresher = Depends(get_dashboard_refresher),
) -> DashboardResponse:
    snapshot = await refresher.refresh(read_model, recent_limit=settings.recent_updates_limit)
    cohorts = snapshot.cohorts

    def rows(participants):
        return [ParticipantRow.from_dto(participant) for participant in participants]

    return DashboardResponse(
        counts=DashboardCounts(
            total_participants=cohorts.total_participants,
            total_responses=cohorts.total_responses,
            total_confirmed=len(cohorts.ceremony_yes),
            total_declined=len(cohorts.ceremony_no),
            total_pending=len(cohorts.ceremony_pending),
            attendance_rate=cohorts.attendance_rate,
            dinner_yes_count=len(cohorts.dinner_yes),
            dinner_invitees_count=cohorts.dinner_invitees_count,
        ),
        cohorts=DashboardCohorts(
            ceremony_yes=rows(cohorts.ceremony_yes),
            ceremony_no=rows(cohorts.ceremony_no),
            ceremony_pending=rows(cohorts.ceremony_pending),
            dinner_yes=rows(cohorts.dinner_yes),
            dinner_no=rows(cohorts.dinner_no),
            dinner_pending=rows(cohorts.dinner_pending),
            dinner_not_invited=rows(cohorts.dinner_not_invited),
        ),
        recent_updates=[RSVPRow.from_dto(rsvp) for rsvp in snapshot.recent_updates],
        refreshed_at=snapshot.refreshed_at,
    )
