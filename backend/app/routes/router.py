"""Root router - aggregates all route modules."""

from fastapi import APIRouter

from app.routes import notes

api_router = APIRouter()

# Catch-all note routes, must be included last
api_router.include_router(notes.router, tags=["notes"])
