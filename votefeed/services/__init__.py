"""
VoteFeed Services

- ProposalAggregator: active proposal read-model
- TransactionBuilder: unsigned createProposal / vote transactions
- Manifest builders for the action endpoints
"""

from .actions import (
    ManifestContext,
    build_demo_metadata,
    build_proposal_form_metadata,
    build_vote_metadata,
)
from .proposals import ProposalAggregator
from .transactions import TransactionBuilder, encode_function_call, serialize_transaction

__all__ = [
    "ProposalAggregator",
    "TransactionBuilder",
    "encode_function_call",
    "serialize_transaction",
    "ManifestContext",
    "build_proposal_form_metadata",
    "build_vote_metadata",
    "build_demo_metadata",
]
