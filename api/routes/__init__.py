"""
Route modules. Import and include in main app.
"""

from api.routes.health import router as health_router
from api.routes.images import router as images_router
from api.routes.query import router as query_router

__all__ = ["health_router", "images_router", "query_router"]
