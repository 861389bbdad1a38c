"""Candidate-selection demo action (GET /api/sherry)."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from votefeed.api.cors import CORS_HEADERS
from votefeed.api.dependencies import ContractTargetDep, ServerUrlDep, SettingsDep
from votefeed.services import ManifestContext, build_demo_metadata

router = APIRouter()


@router.get("/sherry")
async def get_demo_action(
    settings: SettingsDep,
    target: ContractTargetDep,
    server_url: ServerUrlDep,
) -> JSONResponse:
    ctx = ManifestContext.from_settings(
        settings, target, server_url, icon_base_url=settings.asset_base_url
    )
    return JSONResponse(content=build_demo_metadata(ctx).to_response(), headers=CORS_HEADERS)
