"""
Tests for the action manifest builders.
"""

from votefeed.contracts import PROPOSAL_CONTRACT_ABI
from votefeed.models import Proposal
from votefeed.services import (
    ManifestContext,
    build_demo_metadata,
    build_proposal_form_metadata,
    build_vote_metadata,
)

CREATOR = "0x" + "12" * 20


def _ctx(**overrides) -> ManifestContext:
    values = {
        "server_url": "https://votes.example.com",
        "icon_base_url": "https://votes.example.com",
        "site_url": "https://sherry.social",
        "chain": "fuji",
    }
    values.update(overrides)
    return ManifestContext(**values)


class TestManifestContext:
    """Tests for ManifestContext.from_settings()."""

    def test_from_settings(self, settings, target):
        ctx = ManifestContext.from_settings(settings, target, "http://localhost:3000")

        assert ctx.server_url == "http://localhost:3000"
        assert ctx.icon_base_url == "https://votes.example.com"
        assert ctx.site_url == "https://sherry.social"
        assert ctx.chain == "fuji"

    def test_icon_base_override(self, settings, target):
        ctx = ManifestContext.from_settings(
            settings, target, "http://x", icon_base_url=settings.asset_base_url
        )
        assert ctx.icon_base_url == "https://cdn.example.com"


class TestProposalFormMetadata:
    """Tests for the create-proposal manifest."""

    def test_single_dynamic_action(self):
        body = build_proposal_form_metadata(_ctx()).to_response()

        assert body["title"] == "Proposal"
        assert body["icon"] == "https://votes.example.com/proposal-bg.jpg"
        assert body["baseUrl"] == "https://votes.example.com"
        assert len(body["actions"]) == 1

        action = body["actions"][0]
        assert action["type"] == "dynamic"
        assert action["label"] == "Submit Proposal"
        assert action["path"] == "/api/proposal"
        assert action["chains"] == {"source": "fuji"}
        assert [p["name"] for p in action["params"]] == ["proposal"]
        assert action["params"][0]["type"] == "text"
        assert action["params"][0]["required"] is True


class TestVoteMetadata:
    """Tests for the vote manifest."""

    def test_vote_up_and_down(self, target):
        proposal = Proposal.from_contract(5, ("Host a hackathon", CREATOR, 300, True), (7, 2))

        body = build_vote_metadata(proposal, target, _ctx()).to_response()

        assert body["title"] == "Proposal: Host a hackathon"
        assert body["description"] == "Vote on this proposal - Current votes: 7 up, 2 down"
        assert body["icon"] == "https://votes.example.com/vote-bg.jpg"

        up, down = body["actions"]
        assert up["label"] == "Vote Up 👍"
        assert down["label"] == "Vote Down 👎"
        for action, direction in ((up, True), (down, False)):
            assert action["type"] == "blockchain"
            assert action["address"] == target.address
            assert action["functionName"] == "vote"
            assert action["abi"] == PROPOSAL_CONTRACT_ABI
            proposal_param, direction_param = action["params"]
            assert proposal_param["name"] == "_proposalId"
            assert proposal_param["value"] == "5"
            assert direction_param["name"] == "_isUpVote"
            assert direction_param["value"] is direction

    def test_uses_target_chain(self, target):
        proposal = Proposal.from_contract(0, ("x", CREATOR, 1, True), (0, 0))

        body = build_vote_metadata(proposal, target, _ctx(chain="avalanche")).to_response()

        assert all(a["chains"] == {"source": "avalanche"} for a in body["actions"])


class TestDemoMetadata:
    """Tests for the candidate-selection manifest."""

    def test_select_param(self):
        body = build_demo_metadata(_ctx(icon_base_url="https://cdn.example.com")).to_response()

        assert body["icon"] == "https://cdn.example.com/vote.png"
        action = body["actions"][0]
        assert action["path"] == "/api/sherry"

        param = action["params"][0]
        assert param["name"] == "selectedCandidate"
        assert param["type"] == "select"
        assert [o["value"] for o in param["options"]] == ["candidate1", "candidate2", "candidate3"]

    def test_titled_after_the_feed(self):
        body = build_demo_metadata(_ctx()).to_response()
        action = body["actions"][0]

        assert body["title"] == action["label"] == "Binary Public Voting Feed"
        assert body["description"] == action["description"] == "Vote on the latest public voting feed"
