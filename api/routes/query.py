"""
Query-string rewriting for client navigation: set or remove parameters.
"""

from fastapi import APIRouter

from core.dependencies import CurrentUser
from models.schemas import QueryResponse, RemoveParamsRequest, SetParamRequest
from utils.query import remove_params, set_param

router = APIRouter(prefix="/api/v1/query", tags=["query"])


@router.post("/set", response_model=QueryResponse)
async def set_query_param(body: SetParamRequest, user: CurrentUser) -> QueryResponse:
    """`{"query": "page=1&sort=asc", "key": "page", "value": "2"}` -> `?page=2&sort=asc`."""
    return QueryResponse(query=set_param(body.query, body.key, body.value))


@router.post("/remove", response_model=QueryResponse)
async def remove_query_params(body: RemoveParamsRequest, user: CurrentUser) -> QueryResponse:
    return QueryResponse(query=remove_params(body.query, body.keys))
