from fastapi import APIRouter
from .routes import duels

api_router = APIRouter()

api_router.include_router(duels.router, prefix="/duels", tags=["duels"])
