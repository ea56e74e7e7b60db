from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.session import SessionUser, require_participant
from src.wishes.reactions import DEFAULT_REACTOR_NAME
from src.wishes.repository.write_models import SqlWishWriteModel, WishWriteModel
from src.wishes.schemas import WishView
from src.wishes.session_identity import SessionIdentity, get_session_identity
from src.wishes.urls import WISHES_URL

router = APIRouter()


class WishSubmit(BaseModel):
    message: str


def get_wish_write_model() -> WishWriteModel:
    return SqlWishWriteModel()


@router.post(WISHES_URL, response_model=WishView, status_code=201)
async def submit_wish(
    data: WishSubmit,
    user: SessionUser = Depends(require_participant),
    identity: SessionIdentity = Depends(get_session_identity),
    write_model: WishWriteModel = Depends(get_wish_write_model),
) -> WishView:
    message = data.message.strip()
    if not message:
        raise HTTPException(status_code=422, detail="Vui lòng nhập lời chúc")

    name = user.display_name.strip() or DEFAULT_REACTOR_NAME
    wish = await write_model.submit_wish(user_id=user.id, name=name, message=message)
    return WishView.build(wish, identity)
