"""
Proposal Feed Routes

GET /api/proposals returns every active proposal with its current vote
tally, newest first.
"""

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from votefeed.api.cors import CORS_HEADERS, preflight_response
from votefeed.api.dependencies import AggregatorDep

router = APIRouter()


@router.get("/proposals")
async def list_proposals(aggregator: AggregatorDep) -> JSONResponse:
    """
    List active proposals.

    Proposals whose reads fail are left out; the feed still succeeds.
    """
    feed = await aggregator.list_active_proposals()
    return JSONResponse(content=feed.to_response(), headers=CORS_HEADERS)


@router.options("/proposals")
async def proposals_preflight() -> Response:
    return preflight_response()
