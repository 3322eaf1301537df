"""API routers package."""

from fastapi import APIRouter

from src.otoutil.api.routers.alias import router as alias_router
from src.otoutil.api.routers.oto import router as oto_router

api_router = APIRouter()

# Oto.ini line parsing and formatting router
api_router.include_router(oto_router)

# Alias normalization router (pitch range, suffixes)
api_router.include_router(alias_router)
