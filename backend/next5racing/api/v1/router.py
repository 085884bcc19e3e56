"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from next5racing.api.v1.routes import races

api_router = APIRouter()

api_router.include_router(races.router, tags=["Races"])
