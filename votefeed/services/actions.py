"""
Action Manifest Builders

Builds the manifests served by the GET side of the action endpoints. Each
builder returns validated ActionMetadata; a builder bug surfaces as
MetadataValidationError instead of a manifest the client cannot render.
"""

from dataclasses import dataclass

from votefeed.config import ContractTarget, Settings
from votefeed.contracts import PROPOSAL_CONTRACT_ABI
from votefeed.models import ActionMetadata, Proposal, create_metadata

PROPOSAL_ACTION_PATH = "/api/proposal"
VOTE_ACTION_PATH = "/api/vote"
DEMO_ACTION_PATH = "/api/sherry"


@dataclass(frozen=True)
class ManifestContext:
    """Per-request values every manifest needs."""

    server_url: str
    icon_base_url: str
    site_url: str
    chain: str

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        target: ContractTarget,
        server_url: str,
        icon_base_url: str | None = None,
    ) -> "ManifestContext":
        return cls(
            server_url=server_url,
            icon_base_url=icon_base_url or settings.base_url,
            site_url=settings.action_site_url,
            chain=target.info.action_chain,
        )


def build_proposal_form_metadata(ctx: ManifestContext) -> ActionMetadata:
    """Manifest for submitting a new proposal through /api/proposal."""
    return create_metadata({
        "url": ctx.site_url,
        "baseUrl": ctx.server_url,
        "icon": f"{ctx.icon_base_url}/proposal-bg.jpg",
        "title": "Proposal",
        "description": "Submit a proposal to the public voting feed",
        "actions": [
            {
                "type": "dynamic",
                "label": "Submit Proposal",
                "description": "Submit a proposal for the public voting feed",
                "chains": {"source": ctx.chain},
                "path": PROPOSAL_ACTION_PATH,
                "params": [
                    {
                        "name": "proposal",
                        "label": "Your Proposal",
                        "type": "text",
                        "value": "",
                        "required": True,
                        "description": "The proposal you want to submit",
                    },
                ],
            },
        ],
    })


def _vote_action(
    proposal: Proposal,
    target: ContractTarget,
    ctx: ManifestContext,
    is_up_vote: bool,
) -> dict:
    proposal_id = str(proposal.id)
    return {
        "type": "blockchain",
        "label": "Vote Up 👍" if is_up_vote else "Vote Down 👎",
        "address": target.address,
        "abi": PROPOSAL_CONTRACT_ABI,
        "functionName": "vote",
        "chains": {"source": ctx.chain},
        "params": [
            {
                "name": "_proposalId",
                "label": proposal_id,
                "type": "uint256",
                "value": proposal_id,
                "required": True,
                "fixed": True,
                "description": "The ID of the proposal to vote for",
            },
            {
                "name": "_isUpVote",
                "label": "Up Vote" if is_up_vote else "Down Vote",
                "type": "boolean",
                "value": is_up_vote,
                "required": True,
                "fixed": True,
                "description": (
                    "Vote up for this proposal" if is_up_vote
                    else "Vote down for this proposal"
                ),
            },
        ],
    }


def build_vote_metadata(
    proposal: Proposal,
    target: ContractTarget,
    ctx: ManifestContext,
) -> ActionMetadata:
    """Manifest with Vote Up / Vote Down contract calls for one proposal."""
    return create_metadata({
        "url": ctx.site_url,
        "baseUrl": ctx.server_url,
        "icon": f"{ctx.icon_base_url}/vote-bg.jpg",
        "title": f"Proposal: {proposal.text}",
        "description": (
            f"Vote on this proposal - Current votes: "
            f"{proposal.up_votes} up, {proposal.down_votes} down"
        ),
        "actions": [
            _vote_action(proposal, target, ctx, is_up_vote=True),
            _vote_action(proposal, target, ctx, is_up_vote=False),
        ],
    })


def build_demo_metadata(ctx: ManifestContext) -> ActionMetadata:
    """Candidate-selection manifest served at /api/sherry."""
    return create_metadata({
        "url": ctx.site_url,
        "baseUrl": ctx.server_url,
        "icon": f"{ctx.icon_base_url}/vote.png",
        "title": "Binary Public Voting Feed",
        "description": "Vote on the latest public voting feed",
        "actions": [
            {
                "type": "dynamic",
                "label": "Binary Public Voting Feed",
                "description": "Vote on the latest public voting feed",
                "chains": {"source": ctx.chain},
                "path": DEMO_ACTION_PATH,
                "params": [
                    {
                        "name": "selectedCandidate",
                        "label": "Select your Candidate",
                        "type": "select",
                        "required": True,
                        "options": [
                            {"label": "Candidate 1", "value": "candidate1"},
                            {"label": "Candidate 2", "value": "candidate2"},
                            {"label": "Candidate 3", "value": "candidate3"},
                        ],
                    },
                ],
            },
        ],
    })
