"""
Tests for the proposal page and its formatting helpers.
"""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from tests.conftest import make_read_client
from votefeed.api.routes.pages import (
    action_link,
    format_time_ago,
    truncate_address,
    vote_percentage,
)


class TestFormatTimeAgo:
    """Tests for format_time_ago()."""

    @pytest.mark.parametrize(
        "age,expected",
        [
            (0, "Just now"),
            (59, "Just now"),
            (60, "1m ago"),
            (3599, "59m ago"),
            (3600, "1h ago"),
            (86399, "23h ago"),
            (86400, "1d ago"),
            (86400 * 10 + 5, "10d ago"),
        ],
    )
    def test_buckets(self, age, expected):
        assert format_time_ago(1_000_000 - age, now=1_000_000) == expected

    def test_future_timestamp(self):
        assert format_time_ago(2_000, now=1_000) == "Just now"


class TestHelpers:
    """Tests for the remaining page helpers."""

    def test_truncate_address(self):
        assert truncate_address("0x1234567890abcdef1234567890abcdef12345678") == "0x1234...5678"

    def test_truncate_short_address(self):
        assert truncate_address("0x1234") == "0x1234"

    @pytest.mark.parametrize("votes,total,expected", [(0, 0, 0), (3, 4, 75), (1, 8, 13)])
    def test_vote_percentage(self, votes, total, expected):
        assert vote_percentage(votes, total) == expected

    def test_action_link_encodes_url(self):
        link = action_link(
            "https://app.sherry.social/action",
            "https://votes.example.com/api/vote?proposal=3",
        )

        assert link == (
            "https://app.sherry.social/action?url="
            "https%3A%2F%2Fvotes.example.com%2Fapi%2Fvote%3Fproposal%3D3"
        )
        assert parse_qs(urlparse(link).query)["url"] == [
            "https://votes.example.com/api/vote?proposal=3"
        ]


class TestProposalsPage:
    """Tests for GET /."""

    def test_lists_active_proposals(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "Community Governance" in html
        assert "Host a hackathon" in html
        assert "Fund the community garden" in html
        assert "Rename the DAO" not in html
        assert html.index("Host a hackathon") < html.index("Fund the community garden")
        assert "Showing 2 active proposals" in html

    def test_links_to_action_client(self, client):
        html = client.get("/").text

        assert "https://app.sherry.social/action?url=" in html
        assert "https%3A%2F%2Fvotes.example.com%2Fapi%2Fvote%3Fproposal%3D2" in html
        assert "https%3A%2F%2Fvotes.example.com%2Fapi%2Fproposal" in html

    def test_empty_state(self, app_factory):
        client = TestClient(app_factory(make_read_client({}, count=0)))

        html = client.get("/").text

        assert "No Proposals Available" in html
        assert "Be the first to create a proposal!" in html

    def test_escapes_proposal_text(self, app_factory):
        creator = "0x" + "12" * 20
        read_client = make_read_client({0: ("<script>alert(1)</script>", creator, 1, True)})
        client = TestClient(app_factory(read_client))

        html = client.get("/").text

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_error_panel_when_unconfigured(self, app_factory, read_client):
        client = TestClient(app_factory(read_client, smart_contract_address="0x123"))

        response = client.get("/")

        assert response.status_code == 200
        assert "Error loading proposals" in response.text
        assert "SMART_CONTRACT_ADDRESS" in response.text
