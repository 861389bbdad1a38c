"""
VoteFeed Models

Proposal read-model and action-manifest schema.
"""

from .actions import (
    MAX_ACTIONS,
    SUPPORTED_CHAINS,
    ActionMetadata,
    ActionParam,
    BlockchainAction,
    ChainContext,
    DynamicAction,
    ExecutionResponse,
    SelectOption,
    create_metadata,
)
from .proposal import Proposal, ProposalList

__all__ = [
    # Proposals
    "Proposal",
    "ProposalList",
    # Actions
    "MAX_ACTIONS",
    "SUPPORTED_CHAINS",
    "ActionMetadata",
    "ActionParam",
    "BlockchainAction",
    "ChainContext",
    "DynamicAction",
    "ExecutionResponse",
    "SelectOption",
    "create_metadata",
]
