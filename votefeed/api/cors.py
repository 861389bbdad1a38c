"""
CORS headers for the action endpoints.

The action client fetches manifests and execution responses cross-origin
from any host, so every API response allows all origins and each route
answers its own OPTIONS preflight.
"""

from fastapi import Response

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}

PREFLIGHT_HEADERS: dict[str, str] = {
    **CORS_HEADERS,
    "Access-Control-Allow-Headers": (
        "Content-Type, Authorization, X-CSRF-Token, X-Requested-With, Accept, "
        "Accept-Version, Content-Length, Content-MD5, Date, X-Api-Version"
    ),
}


def preflight_response() -> Response:
    """Empty 204 answer to an OPTIONS preflight."""
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)
