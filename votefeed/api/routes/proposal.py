"""
Create-Proposal Action Routes

GET serves the manifest of a single dynamic action with one text field; the
action client POSTs the field back and receives an unsigned
createProposal transaction to sign.
"""

from fastapi import APIRouter, Query, Response
from fastapi.responses import JSONResponse

from votefeed.api.cors import CORS_HEADERS, preflight_response
from votefeed.api.dependencies import (
    ContractTargetDep,
    ServerUrlDep,
    SettingsDep,
    TransactionBuilderDep,
)
from votefeed.api.params import require_param
from votefeed.services import ManifestContext, build_proposal_form_metadata

router = APIRouter()


@router.get("/proposal")
async def get_proposal_action(
    settings: SettingsDep,
    target: ContractTargetDep,
    server_url: ServerUrlDep,
) -> JSONResponse:
    """Manifest for the create-proposal form."""
    ctx = ManifestContext.from_settings(settings, target, server_url)
    metadata = build_proposal_form_metadata(ctx)
    return JSONResponse(content=metadata.to_response(), headers=CORS_HEADERS)


@router.post("/proposal")
async def execute_proposal_action(
    builder: TransactionBuilderDep,
    proposal: str | None = Query(default=None, description="Proposal text"),
) -> JSONResponse:
    """
    Prepare a createProposal transaction.

    The text is trimmed before encoding.
    """
    text = require_param("proposal", proposal)
    response = builder.build_create_proposal(text)
    return JSONResponse(content=response.to_response(), headers=CORS_HEADERS)


@router.options("/proposal")
async def proposal_preflight() -> Response:
    return preflight_response()
