"""
Unsigned Transaction Builder

Encodes ProposalContract calls and serializes them as unsigned legacy
transactions. The action client deserializes the payload, lets the user's
wallet sign it and broadcasts it; this service never holds keys.
"""

import json
from collections.abc import Sequence
from typing import Any

import structlog
from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from votefeed.config import ContractTarget
from votefeed.contracts import PROPOSAL_CONTRACT_ABI, function_signature, get_function_abi
from votefeed.exceptions import InvalidParameterError
from votefeed.models import ExecutionResponse

logger = structlog.get_logger(__name__)

# Largest integer a JavaScript number holds exactly
MAX_SAFE_INTEGER = 2**53 - 1
BIGINT_PREFIX = "#bigint."


def encode_function_call(
    abi: list[dict[str, Any]],
    function_name: str,
    args: Sequence[Any],
) -> str:
    """
    ABI-encode a function call.

    Returns:
        0x-prefixed calldata: 4-byte selector followed by the encoded args

    Raises:
        KeyError: If the function is not in the ABI
        ValueError: If the number of args does not match the ABI
    """
    entry = get_function_abi(abi, function_name)
    types = [param["type"] for param in entry.get("inputs", [])]
    if len(types) != len(args):
        raise ValueError(
            f"{function_name} takes {len(types)} arguments, got {len(args)}"
        )
    selector = function_signature_to_4byte_selector(function_signature(entry))
    return "0x" + (selector + encode(types, list(args))).hex()


def _tag_bigints(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and abs(value) > MAX_SAFE_INTEGER:
        return f"{BIGINT_PREFIX}{value}"
    if isinstance(value, dict):
        return {k: _tag_bigints(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_tag_bigints(v) for v in value]
    return value


def serialize_transaction(tx: dict[str, Any]) -> str:
    """
    Serialize a transaction for the action client.

    Compact JSON; integers outside the JavaScript safe range are written as
    "#bigint.<n>" strings, which the client revives as bigints.
    """
    return json.dumps(_tag_bigints(tx), separators=(",", ":"))


class TransactionBuilder:
    """Builds unsigned ProposalContract transactions for one contract target."""

    def __init__(self, target: ContractTarget) -> None:
        self.target = target

    def build_transaction(self, function_name: str, args: Sequence[Any]) -> dict[str, Any]:
        """
        Build an unsigned legacy transaction calling function_name.

        Raises:
            ConfigurationError: If the contract address is unusable
        """
        self.target.ensure_configured()
        return {
            "to": self.target.address,
            "data": encode_function_call(PROPOSAL_CONTRACT_ABI, function_name, args),
            "chainId": self.target.chain_id,
            "type": "legacy",
        }

    def _execution_response(self, tx: dict[str, Any]) -> ExecutionResponse:
        return ExecutionResponse(
            serialized_transaction=serialize_transaction(tx),
            chain_id=self.target.network_name,
        )

    def build_create_proposal(self, text: str) -> ExecutionResponse:
        """
        Prepare createProposal(text).

        Raises:
            InvalidParameterError: If the text is blank
        """
        text = text.strip()
        if not text:
            raise InvalidParameterError("The proposal text must not be empty")

        tx = self.build_transaction("createProposal", [text])
        logger.info("create_proposal_transaction_prepared", length=len(text))
        return self._execution_response(tx)

    def build_vote(self, proposal_id: int, is_up_vote: bool) -> ExecutionResponse:
        """Prepare vote(proposal_id, is_up_vote)."""
        tx = self.build_transaction("vote", [proposal_id, is_up_vote])
        logger.info(
            "vote_transaction_prepared",
            proposal_id=proposal_id,
            is_up_vote=is_up_vote,
        )
        return self._execution_response(tx)
