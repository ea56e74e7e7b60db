"""Attendance state derivation over participants fetched from the store.

Everything here is pure: inputs are never mutated and every function is total,
a missing RSVP (or a missing answer inside one) always means "pending".
"""

from collections.abc import Iterable, Sequence

from src.participants.dtos import (
    CeremonyState,
    Cohorts,
    DinnerState,
    ParticipantDTO,
    ParticipantGroup,
    RSVPDTO,
)


def _answer_state(answer: bool | None) -> CeremonyState:
    if answer is None:
        return CeremonyState.PENDING
    return CeremonyState.YES if answer else CeremonyState.NO


def classify_ceremony(rsvp: RSVPDTO | None) -> CeremonyState:
    """Ceremony state of an optional RSVP: pending, yes or no."""
    if rsvp is None:
        return CeremonyState.PENDING
    return _answer_state(rsvp.will_attend)


def classify_dinner(participant: ParticipantDTO) -> DinnerState:
    """
    Dinner state of a participant.
    Participants who are not dinner-invited are always not_invited, whatever
    dinner answer their RSVP may carry.
    """
    if not participant.invited_to_dinner:
        return DinnerState.NOT_INVITED
    if participant.rsvp is None:
        return DinnerState.PENDING
    return DinnerState(_answer_state(participant.rsvp.will_attend_dinner).value)


def partition(participants: Iterable[ParticipantDTO]) -> Cohorts:
    """Split participants into ceremony and dinner cohorts in a single pass, keeping input order."""
    ceremony: dict[CeremonyState, list[ParticipantDTO]] = {state: [] for state in CeremonyState}
    dinner: dict[DinnerState, list[ParticipantDTO]] = {state: [] for state in DinnerState}
    total = 0
    dinner_invitees = 0

    for participant in participants:
        total += 1
        if participant.invited_to_dinner:
            dinner_invitees += 1
        ceremony[classify_ceremony(participant.rsvp)].append(participant)
        dinner[classify_dinner(participant)].append(participant)

    return Cohorts(
        ceremony_yes=ceremony[CeremonyState.YES],
        ceremony_no=ceremony[CeremonyState.NO],
        ceremony_pending=ceremony[CeremonyState.PENDING],
        dinner_yes=dinner[DinnerState.YES],
        dinner_no=dinner[DinnerState.NO],
        dinner_pending=dinner[DinnerState.PENDING],
        dinner_not_invited=dinner[DinnerState.NOT_INVITED],
        total_participants=total,
        dinner_invitees_count=dinner_invitees,
    )


def _search_fields(participant: ParticipantDTO) -> list[str]:
    values = [
        participant.display_name,
        participant.salutation,
        participant.username,
        participant.email,
    ]
    if participant.rsvp is not None:
        values.extend([participant.rsvp.name, participant.rsvp.email])
    return [value for value in values if value]


def filter_participants(
    participants: Iterable[ParticipantDTO],
    group: ParticipantGroup | None = None,
    ceremony: CeremonyState | None = None,
    dinner: DinnerState | None = None,
    text: str | None = None,
) -> list[ParticipantDTO]:
    """
    Filter participants the way the organizer's participant table does.
    None means "all" for every criterion. The dinner filter does not apply
    to the not-invited group.
    """
    needle = (text or "").strip().lower()
    result = []
    for participant in participants:
        if group is ParticipantGroup.INVITED and not participant.invited_to_dinner:
            continue
        if group is ParticipantGroup.NOT_INVITED and participant.invited_to_dinner:
            continue
        if ceremony is not None and classify_ceremony(participant.rsvp) is not ceremony:
            continue
        if (
            dinner is not None
            and group is not ParticipantGroup.NOT_INVITED
            and classify_dinner(participant) is not dinner
        ):
            continue
        if needle and not any(needle in value.lower() for value in _search_fields(participant)):
            continue
        result.append(participant)
    return result


def recent_updates(rsvps: Sequence[RSVPDTO], limit: int = 5) -> list[RSVPDTO]:
    """Newest RSVP records first; records without a timestamp sort last."""
    dated = [rsvp for rsvp in rsvps if rsvp.created_at is not None]
    undated = [rsvp for rsvp in rsvps if rsvp.created_at is None]
    dated.sort(key=lambda rsvp: rsvp.created_at, reverse=True)
    return (dated + undated)[:limit]
