from fastapi import APIRouter

from .features.delete_wish.router import router as delete_wish_router
from .features.list_wishes.router import router as list_wishes_router
from .features.reactions.router import router as reactions_router
from .features.submit_wish.router import router as submit_wish_router

router = APIRouter()

router.include_router(list_wishes_router)
router.include_router(submit_wish_router)
router.include_router(reactions_router)

admin_router = APIRouter()

admin_router.include_router(delete_wish_router)
