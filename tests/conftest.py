"""
VoteFeed - Test Fixtures

Shared pytest fixtures for all test modules.
"""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Must run before votefeed.api.app is imported: it builds a default app from
# the environment at import time.

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("SMART_CONTRACT_ADDRESS", "0x" + "ab" * 20)
os.environ.setdefault("VOTEFEED_RPC_URL", "http://127.0.0.1:9650/ext/bc/C/rpc")

from votefeed.api.app import create_app  # noqa: E402
from votefeed.chains import BaseReadClient, ContractCallError  # noqa: E402
from votefeed.config import ChainNetwork, ContractTarget, Settings  # noqa: E402

CONTRACT_ADDRESS = "0x" + "ab" * 20
CREATOR = "0x" + "12" * 20


# =============================================================================
# Contract State
# =============================================================================

def make_read_client(
    proposals: dict[int, tuple[str, str, int, bool]],
    votes: dict[int, tuple[int, int]] | None = None,
    count: int | None = None,
    failing: set[int] | None = None,
) -> MagicMock:
    """
    Build a mock read client backed by in-memory contract state.

    Args:
        proposals: id -> (text, creator, timestamp, isActive)
        votes: id -> (upVotes, downVotes); missing ids have no votes
        count: getProposalCount result (defaults to len(proposals))
        failing: ids whose getProposal call raises
    """
    votes = votes or {}
    failing = failing or set()
    count = len(proposals) if count is None else count

    async def read_contract(
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        args: Any = (),
    ) -> Any:
        if function_name == "getProposalCount":
            return count
        proposal_id = args[0]
        if function_name == "getProposal":
            if proposal_id in failing or proposal_id not in proposals:
                raise ContractCallError(function_name, ValueError("execution reverted"))
            return proposals[proposal_id]
        if function_name == "getVoteCount":
            return votes.get(proposal_id, (0, 0))
        raise AssertionError(f"unexpected read {function_name}")

    client = MagicMock(spec=BaseReadClient)
    client.network = ChainNetwork.AVALANCHE_FUJI
    client.network_name = "Avalanche Fuji"
    client.is_initialized = True
    client.initialize = AsyncMock()
    client.close = AsyncMock()
    client.read_contract = AsyncMock(side_effect=read_contract)
    return client


@pytest.fixture
def target() -> ContractTarget:
    return ContractTarget(address=CONTRACT_ADDRESS, network=ChainNetwork.AVALANCHE_FUJI)


@pytest.fixture
def sample_proposals() -> dict[int, tuple[str, str, int, bool]]:
    """Three proposals: 0 and 2 active, 1 closed."""
    return {
        0: ("Fund the community garden", CREATOR, 100, True),
        1: ("Rename the DAO", CREATOR, 200, False),
        2: ("Host a hackathon", CREATOR, 300, True),
    }


@pytest.fixture
def sample_votes() -> dict[int, tuple[int, int]]:
    return {0: (3, 1), 1: (0, 5), 2: (7, 0)}


@pytest.fixture
def read_client(sample_proposals, sample_votes) -> MagicMock:
    return make_read_client(sample_proposals, sample_votes)


# =============================================================================
# Application
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings independent of the process environment."""
    return Settings(
        _env_file=None,
        app_env="testing",
        smart_contract_address=CONTRACT_ADDRESS,
        base_url="https://votes.example.com",
        public_url="https://cdn.example.com",
        rpc_url="http://127.0.0.1:9650/ext/bc/C/rpc",
    )


@pytest.fixture
def app_factory(settings) -> Callable[..., Any]:
    """Create an app around a given read client, optionally overriding settings."""

    def factory(client: MagicMock, **overrides: Any):
        app_settings = settings.model_copy(update=overrides) if overrides else settings
        return create_app(settings=app_settings, read_client=client)

    return factory


@pytest.fixture
def app(app_factory, read_client):
    return app_factory(read_client)


@pytest.fixture
def client(app) -> TestClient:
    """Synchronous test client (lifespan not run; the mock client is ready)."""
    return TestClient(app)
