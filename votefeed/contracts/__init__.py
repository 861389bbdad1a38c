"""Contract ABIs used by VoteFeed."""

from .proposal_contract import PROPOSAL_CONTRACT_ABI, function_signature, get_function_abi

__all__ = [
    "PROPOSAL_CONTRACT_ABI",
    "function_signature",
    "get_function_abi",
]
