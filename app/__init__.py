# app/__init__.py
"""
Product API package; exposes the FastAPI application so that

    uvicorn app:app

serves the /api/Product endpoints.
"""

from .main import app

__all__ = ["app"]
