from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.config.settings import settings
from src.wishes.repository.read_models import SqlWishReadModel, WishReadModel
from src.wishes.schemas import WishView
from src.wishes.session_identity import SessionIdentity, get_session_identity
from src.wishes.urls import WISHES_URL

router = APIRouter()


class WishPageResponse(BaseModel):
    wishes: list[WishView]
    page: int
    limit: int
    has_more: bool


def get_wish_read_model() -> WishReadModel:
    return SqlWishReadModel()


@router.get(WISHES_URL, response_model=WishPageResponse)
async def list_wishes(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.wishes_page_size, ge=1, le=100),
    identity: SessionIdentity = Depends(get_session_identity),
    read_model: WishReadModel = Depends(get_wish_read_model),
) -> WishPageResponse:
    """Newest wishes first, each with its reaction summary for the current viewer."""
    wishes = await read_model.list_wishes(page=page, limit=limit)
    return WishPageResponse(
        wishes=[WishView.build(wish, identity) for wish in wishes],
        page=page,
        limit=limit,
        # A full page means there may be more
        has_more=len(wishes) == limit,
    )
