"""
ProposalContract ABI

The deployed contract stores proposals in a dense array indexed from zero
and keeps up/down tallies per proposal. Only the functions this service
reads or builds transactions for are listed.
"""

from typing import Any

PROPOSAL_CONTRACT_ABI: list[dict[str, Any]] = [
    {
        "inputs": [],
        "name": "getProposalCount",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_proposalId", "type": "uint256"}],
        "name": "getProposal",
        "outputs": [
            {"internalType": "string", "name": "text", "type": "string"},
            {"internalType": "address", "name": "creator", "type": "address"},
            {"internalType": "uint256", "name": "timestamp", "type": "uint256"},
            {"internalType": "bool", "name": "isActive", "type": "bool"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_proposalId", "type": "uint256"}],
        "name": "getVoteCount",
        "outputs": [
            {"internalType": "uint256", "name": "upVotes", "type": "uint256"},
            {"internalType": "uint256", "name": "downVotes", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "string", "name": "_text", "type": "string"}],
        "name": "createProposal",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint256", "name": "_proposalId", "type": "uint256"},
            {"internalType": "bool", "name": "_isUpVote", "type": "bool"},
        ],
        "name": "vote",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def get_function_abi(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """
    Find a function entry in an ABI.

    Raises:
        KeyError: If the ABI has no function with that name
    """
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise KeyError(f"Function {function_name!r} not found in ABI")


def function_signature(entry: dict[str, Any]) -> str:
    """Canonical signature used for the 4-byte selector, e.g. vote(uint256,bool)."""
    types = ",".join(param["type"] for param in entry.get("inputs", []))
    return f"{entry['name']}({types})"
