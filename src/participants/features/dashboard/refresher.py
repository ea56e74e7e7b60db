import logging
from dataclasses import dataclass, field
from datetime import datetime

from src.models.base import utcnow
from src.participants.attendance import partition, recent_updates
from src.participants.dtos import Cohorts, RSVPDTO
from src.participants.repository.read_models import ParticipantReadModel
from src.utils.sequencing import LatestOnlySequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    cohorts: Cohorts
    recent_updates: list[RSVPDTO] = field(default_factory=list)
    refreshed_at: datetime | None = None
    token: int = 0


class DashboardRefresher:
    """
    Computes dashboard snapshots and keeps the latest one.

    A refresh that finishes after a newer refresh has started never replaces
    the shared snapshot. Its caller gets the newer snapshot when that one is
    already published, and its own result otherwise.
    """

    def __init__(self, sequencer: LatestOnlySequencer | None = None) -> None:
        self._sequencer = sequencer or LatestOnlySequencer()
        self.snapshot: DashboardSnapshot | None = None

    async def refresh(self, read_model: ParticipantReadModel, recent_limit: int = 5) -> DashboardSnapshot:
        token = self._sequencer.next_token()
        participants = await read_model.list_participants()
        rsvps = await read_model.list_rsvp_responses()

        snapshot = DashboardSnapshot(
            cohorts=partition(participants),
            recent_updates=recent_updates(rsvps, limit=recent_limit),
            refreshed_at=utcnow(),
            token=token,
        )

        if self._sequencer.is_current(token):
            self.snapshot = snapshot
            return snapshot

        if self.snapshot is not None and self.snapshot.token > token:
            logger.debug("Stale dashboard refresh %s, answering with %s", token, self.snapshot.token)
            return self.snapshot

        logger.debug(
            "Stale dashboard refresh %s finished before %s, not published", token, self._sequencer.latest
        )
        return snapshot


dashboard_refresher = DashboardRefresher()
