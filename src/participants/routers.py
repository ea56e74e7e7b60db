from fastapi import APIRouter

from .features.dashboard.router import router as dashboard_router
from .features.list_participants.router import router as list_participants_router
from .features.manage_participants.router import router as manage_participants_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(submit_rsvp_router)

admin_router = APIRouter()

admin_router.include_router(dashboard_router)
admin_router.include_router(list_participants_router)
admin_router.include_router(manage_participants_router)
