from fastapi import APIRouter

from .features.login.router import router as login_router
from .features.register.router import router as register_router
from .features.update_profile.router import router as update_profile_router

router = APIRouter()

router.include_router(login_router)
router.include_router(register_router)
router.include_router(update_profile_router)
