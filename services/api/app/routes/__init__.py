"""API routes."""

from fastapi import APIRouter

from app.routes import search

api_router = APIRouter()

# Search endpoint
api_router.include_router(search.router, tags=["search"])

# Legacy path used by the web client
api_router.include_router(search.router, prefix="/api", tags=["search"], include_in_schema=False)
