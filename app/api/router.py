"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.properties import router as properties_router
from app.api.auth import router as auth_router
from app.api.schedules import router as schedules_router
from app.api.admin import router as admin_router

api_router = APIRouter()
api_router.include_router(properties_router)
api_router.include_router(auth_router)
api_router.include_router(schedules_router)
api_router.include_router(admin_router)
