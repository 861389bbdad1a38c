"""
Vote Action Routes

GET /api/vote?proposal=<id> serves a manifest with two contract-call
actions (vote up, vote down) for one proposal. POST prepares the same vote
as an unsigned transaction, after checking the proposal exists and is still
open.

Query parameters are parsed in dependencies declared ahead of the
aggregator, so a malformed request is rejected before any chain access.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from votefeed.api.cors import CORS_HEADERS, preflight_response
from votefeed.api.dependencies import (
    AggregatorDep,
    ContractTargetDep,
    ServerUrlDep,
    SettingsDep,
    TransactionBuilderDep,
)
from votefeed.api.params import parse_bool, parse_proposal_id, require_param
from votefeed.exceptions import ProposalInactiveError
from votefeed.services import ManifestContext, build_vote_metadata

logger = structlog.get_logger(__name__)

router = APIRouter()


def manifest_proposal_id(
    proposal: str | None = Query(default=None, description="Proposal id"),
) -> int:
    return parse_proposal_id("proposal", proposal)


def vote_proposal_id(
    proposal_id: str | None = Query(default=None, alias="proposalId"),
) -> int:
    return parse_proposal_id("proposalId", proposal_id)


def vote_direction(
    is_up_vote: str | None = Query(default=None, alias="isUpVote"),
) -> bool:
    return parse_bool(require_param("isUpVote", is_up_vote, hint="true/false"))


@router.get("/vote")
async def get_vote_action(
    proposal_id: Annotated[int, Depends(manifest_proposal_id)],
    aggregator: AggregatorDep,
    settings: SettingsDep,
    target: ContractTargetDep,
    server_url: ServerUrlDep,
) -> JSONResponse:
    """Manifest for voting on one proposal, titled with its text and tally."""
    found = await aggregator.get_proposal(proposal_id)

    ctx = ManifestContext.from_settings(settings, target, server_url)
    metadata = build_vote_metadata(found, target, ctx)
    return JSONResponse(content=metadata.to_response(), headers=CORS_HEADERS)


@router.post("/vote")
async def execute_vote_action(
    proposal_id: Annotated[int, Depends(vote_proposal_id)],
    is_up_vote: Annotated[bool, Depends(vote_direction)],
    aggregator: AggregatorDep,
    builder: TransactionBuilderDep,
) -> JSONResponse:
    """
    Prepare a vote transaction.

    Raises:
        MissingParameterError: proposalId or isUpVote is absent
        ProposalNotFoundError: The proposal cannot be read
        ProposalInactiveError: The proposal is closed
    """
    found = await aggregator.get_proposal(proposal_id)
    if not found.is_active:
        logger.info("vote_rejected_inactive", proposal_id=proposal_id)
        raise ProposalInactiveError(proposal_id)

    response = builder.build_vote(proposal_id, is_up_vote)
    return JSONResponse(content=response.to_response(), headers=CORS_HEADERS)


@router.options("/vote")
async def vote_preflight() -> Response:
    return preflight_response()
