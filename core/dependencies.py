"""
FastAPI dependency injection: settings, authenticated user, database handle.
Centralizes dependencies for testability and clean routes.
"""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from core.config import Settings, get_settings
from core.database import DatabaseConnection, get_database_connection

SettingsDep = Annotated[Settings, Depends(get_settings)]
DatabaseConnectionDep = Annotated[DatabaseConnection, Depends(get_database_connection)]


async def get_current_user(request: Request) -> dict[str, Any]:
    """Token payload stored by AuthMiddleware; 401 on routes the gate let through unauthenticated."""
    user = getattr(request.state, "user", None)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_database(connection: DatabaseConnectionDep) -> Any:
    """Connected database handle; connects on first use."""
    return await connection.connect()


CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]
DatabaseDep = Annotated[Any, Depends(get_database)]
