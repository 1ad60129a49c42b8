"""API Routes module"""
from fastapi import APIRouter

from .ask_ai import router as ask_ai_router
from .roles import router as roles_router

# Main API router
api_router = APIRouter()

api_router.include_router(ask_ai_router)
api_router.include_router(roles_router)

__all__ = ["api_router"]
