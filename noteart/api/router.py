"""API router aggregator."""
from fastapi import APIRouter
from noteart.api.routers import ai, auth, health, notes, storage, tags

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(notes.router)
api_router.include_router(tags.router)
api_router.include_router(storage.router)
api_router.include_router(ai.router)
