"""Route modules."""

from fastapi import APIRouter

from arena.api.routes.ws import router as ws_router

api_router = APIRouter()
api_router.include_router(ws_router, tags=["Session"])

__all__ = ["api_router"]
