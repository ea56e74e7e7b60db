from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.auth.session import require_admin
from src.wishes.dtos import WishNotFoundError
from src.wishes.repository.write_models import SqlWishWriteModel, WishWriteModel
from src.wishes.urls import ADMIN_WISH_URL

router = APIRouter(dependencies=[Depends(require_admin)])


def get_wish_write_model() -> WishWriteModel:
    return SqlWishWriteModel()


@router.delete(ADMIN_WISH_URL, status_code=204)
async def delete_wish(
    wish_id: UUID,
    write_model: WishWriteModel = Depends(get_wish_write_model),
) -> None:
    """Organizer moderation: remove a wish together with its reactions."""
    try:
        await write_model.delete_wish(wish_id)
    except WishNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
