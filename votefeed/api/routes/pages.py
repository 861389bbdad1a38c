"""
Proposal Page

Server-rendered list of active proposals. Each card links to the action
client with the vote action URL for that proposal, and a header link opens
the create-proposal action.
"""

import time
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from jinja2 import Environment, PackageLoader, select_autoescape

from votefeed.api.dependencies import ContractTargetDep, SettingsDep, get_read_client
from votefeed.exceptions import VoteFeedError
from votefeed.services import ProposalAggregator

logger = structlog.get_logger(__name__)

router = APIRouter()


def format_time_ago(timestamp: int, now: int | None = None) -> str:
    """Coarse age of a proposal: "3d ago", "5h ago", "12m ago" or "Just now"."""
    now = int(time.time()) if now is None else now
    diff = max(now - timestamp, 0)

    days = diff // 86400
    if days > 0:
        return f"{days}d ago"
    hours = diff // 3600
    if hours > 0:
        return f"{hours}h ago"
    minutes = diff // 60
    if minutes > 0:
        return f"{minutes}m ago"
    return "Just now"


def truncate_address(address: str) -> str:
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def vote_percentage(votes: int, total: int) -> int:
    """Whole percent, halves rounded up (0 when nobody voted)."""
    if total == 0:
        return 0
    return (votes * 200 + total) // (2 * total)


def action_link(action_client_url: str, action_url: str) -> str:
    """URL that opens action_url in the action client."""
    # Same escaping as JavaScript's encodeURIComponent
    encoded = quote(action_url, safe="!*'()")
    return f"{action_client_url}?url={encoded}"


_templates = Environment(
    loader=PackageLoader("votefeed", "templates"),
    autoescape=select_autoescape(),
)
_templates.filters["time_ago"] = format_time_ago
_templates.filters["truncate_address"] = truncate_address
_templates.globals["vote_percentage"] = vote_percentage


@router.get("/", response_class=HTMLResponse)
async def proposals_page(
    request: Request,
    settings: SettingsDep,
    target: ContractTargetDep,
) -> HTMLResponse:
    """
    Render the active proposals.

    A failed load renders an error panel instead of failing the page.
    """
    proposals = []
    error: str | None = None
    try:
        client = await get_read_client(request, target)
        aggregator = ProposalAggregator(
            client, target, max_concurrent_reads=settings.max_concurrent_reads
        )
        feed = await aggregator.list_active_proposals()
        proposals = feed.proposals
    except VoteFeedError as e:
        logger.warning("proposal_page_load_failed", error_type=type(e).__name__, error=e.message)
        error = e.message

    vote_links = {
        p.id: action_link(
            settings.action_client_url,
            f"{settings.base_url}/api/vote?proposal={p.id}",
        )
        for p in proposals
    }
    html = _templates.get_template("proposals.html").render(
        proposals=proposals,
        vote_links=vote_links,
        create_link=action_link(settings.action_client_url, f"{settings.base_url}/api/proposal"),
        error=error,
        network=target.network_name,
        now=int(time.time()),
    )
    return HTMLResponse(content=html)
