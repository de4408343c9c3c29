"""
Core package: configuration, auth gate, database handle and error types.
Kept apart from the API routes and the pure helpers in utils.
"""

from core.config import get_settings

__all__ = ["get_settings"]
