"""HTTP layer: versioned router over the analysis core."""

from fastapi import APIRouter

from api.routes import router as routes_router

api_router = APIRouter()
api_router.include_router(routes_router)

__all__ = ["api_router"]
