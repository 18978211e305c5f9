"""
FastAPI routers grouped by page area.

Each module exposes an APIRouter included by catalog.app.
"""
