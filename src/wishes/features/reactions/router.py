import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.wishes.dtos import DuplicateReactionError, UnknownStickerError, WishNotFoundError
from src.wishes.reactions import ensure_known_sticker
from src.wishes.repository.read_models import SqlWishReadModel, WishReadModel
from src.wishes.repository.write_models import SqlWishWriteModel, WishWriteModel
from src.wishes.schemas import ReactionView
from src.wishes.session_identity import SessionIdentity, get_session_identity
from src.wishes.urls import WISH_REACTIONS_URL

logger = logging.getLogger(__name__)

router = APIRouter()


class ReactionSubmit(BaseModel):
    sticker: str


def get_wish_read_model() -> WishReadModel:
    return SqlWishReadModel()


def get_wish_write_model() -> WishWriteModel:
    return SqlWishWriteModel()


async def _reaction_view(wish_id: UUID, identity: SessionIdentity, read_model: WishReadModel) -> ReactionView:
    reactions = await read_model.list_reactions(wish_id)
    return ReactionView.build(reactions, identity)


@router.get(WISH_REACTIONS_URL, response_model=ReactionView)
async def get_reactions(
    wish_id: UUID,
    identity: SessionIdentity = Depends(get_session_identity),
    read_model: WishReadModel = Depends(get_wish_read_model),
) -> ReactionView:
    if await read_model.get_wish(wish_id) is None:
        raise HTTPException(status_code=404, detail=str(WishNotFoundError(wish_id)))
    return await _reaction_view(wish_id, identity, read_model)


@router.post(WISH_REACTIONS_URL, response_model=ReactionView, status_code=201)
async def add_reaction(
    wish_id: UUID,
    data: ReactionSubmit,
    identity: SessionIdentity = Depends(get_session_identity),
    read_model: WishReadModel = Depends(get_wish_read_model),
    write_model: WishWriteModel = Depends(get_wish_write_model),
) -> ReactionView:
    """
    React to a wish with one sticker. Each session may use each sticker once
    per wish; a repeat is rejected with 409.
    """
    try:
        sticker = ensure_known_sticker(data.sticker)
    except UnknownStickerError as e:
        raise HTTPException(status_code=422, detail=str(e))

    own_reactions = await read_model.list_reactions(wish_id, session_id=identity.session_id)
    if any(reaction.sticker == sticker for reaction in own_reactions):
        logger.debug("Duplicate reaction %s on wish %s from %s", sticker, wish_id, identity.session_id)
        raise HTTPException(status_code=409, detail=str(DuplicateReactionError(wish_id, sticker)))

    try:
        await write_model.add_reaction(
            wish_id=wish_id,
            sticker=sticker,
            session_id=identity.session_id,
            reactor_name=identity.display_name,
        )
    except WishNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return await _reaction_view(wish_id, identity, read_model)
