"""Reaction aggregation and the "who reacted" sentence shown under each wish.

Aggregation and summary functions are pure and total. Session identity is resolved by the caller
(see ``session_identity``); here it is only ever a string.
"""

from collections.abc import Iterable

from src.wishes.dtos import (
    ReactionAggregate,
    ReactionDetail,
    ReactionDTO,
    ReactionSummary,
    UnknownStickerError,
)

STICKERS = (
    "👍",
    "❤️",
    "😂",
    "😮",
    "😢",
    "😡",
    "🎓",
    "🎉",
    "🥳",
    "📸",
    "🧑‍🎓",
    "🎶",
    "🥂",
    "💐",
)

MAX_NAMES_PER_STICKER = 10
MAX_NAMES_IN_SENTENCE = 2
DEFAULT_REACTOR_NAME = "Khách"
VIEWER_TOKEN = "Bạn"
NO_REACTORS_TEXT = "Chưa có người tham gia"


def reactor_name(reaction: ReactionDTO) -> str:
    return (reaction.reactor_name or "").strip() or DEFAULT_REACTOR_NAME


def aggregate(reactions: Iterable[ReactionDTO], viewer_session_id: str | None) -> ReactionAggregate:
    """
    Group reactions by sticker in one pass.

    Each sticker keeps at most MAX_NAMES_PER_STICKER distinct names, the first
    ones seen. Counts are never capped, so a popular sticker reports fewer
    names than reactions.
    """
    by_sticker: dict[str, ReactionDetail] = {}
    viewer_stickers = set()
    total = 0

    for reaction in reactions:
        total += 1
        detail = by_sticker.setdefault(reaction.sticker, ReactionDetail())
        detail.count += 1

        name = reactor_name(reaction)
        if len(detail.names) < MAX_NAMES_PER_STICKER and name not in detail.names:
            detail.names.append(name)

        if viewer_session_id and reaction.session_id == viewer_session_id:
            viewer_stickers.add(reaction.sticker)

    return ReactionAggregate(
        by_sticker=by_sticker,
        total_reactions=total,
        viewer_stickers=frozenset(viewer_stickers),
    )


def build_summary(result: ReactionAggregate, viewer_name: str | None) -> ReactionSummary:
    """
    Order stickers by count and describe who reacted, e.g. "Bạn, Bob và 3 người khác".

    Distinct people are counted from the capped name lists, so the remaining
    count undercounts for stickers with more than MAX_NAMES_PER_STICKER names.
    """
    present = [(sticker, detail) for sticker, detail in result.by_sticker.items() if detail.count > 0]
    # sorted() is stable, ties keep first-seen order
    top_reactions = sorted(present, key=lambda item: item[1].count, reverse=True)

    unique_names: list[str] = []
    for _, detail in top_reactions:
        for name in detail.names:
            if name not in unique_names:
                unique_names.append(name)

    total_people = len(unique_names)
    viewer_reacted = bool(result.viewer_stickers)
    other_names = [name for name in unique_names if name != viewer_name]
    slots = max(0, min(MAX_NAMES_IN_SENTENCE, total_people) - (1 if viewer_reacted else 0))

    names = [VIEWER_TOKEN] if viewer_reacted else []
    names.extend(other_names[:slots])
    remaining = max(0, total_people - len(names))

    if not names:
        sentence = f"{result.total_reactions} cảm xúc"
    elif remaining > 0:
        sentence = f"{', '.join(names)} và {remaining} người khác"
    else:
        sentence = ", ".join(names)

    return ReactionSummary(top_reactions=top_reactions, sentence=sentence)


def tooltip_text(detail: ReactionDetail) -> str:
    """Hover text for one sticker: the captured names plus how many were left out."""
    if not detail.names:
        return NO_REACTORS_TEXT
    names = ", ".join(detail.names)
    remaining = detail.count - len(detail.names)
    if remaining > 0:
        names = f"{names}, +{remaining} người khác"
    return f"{detail.count} người đã cảm xúc: {names}"


def ensure_known_sticker(sticker: str) -> str:
    """Return the sticker unchanged, or raise UnknownStickerError."""
    if sticker not in STICKERS:
        raise UnknownStickerError(sticker)
    return sticker
