"""
Read Client Base

Abstract interface for read-only contract access. The services only ever
depend on this interface, so tests substitute an in-memory client and the
EVM implementation stays confined to evm_client.py.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..config import NETWORKS, ChainNetwork

logger = logging.getLogger(__name__)


class ChainClientError(Exception):
    """Base exception for chain client errors."""
    pass


class ContractCallError(ChainClientError):
    """Raised when a read-only contract call fails (revert, decode, transport)."""

    def __init__(self, function_name: str, cause: Exception) -> None:
        super().__init__(f"{function_name} call failed: {cause}")
        self.function_name = function_name
        self.cause = cause


class BaseReadClient(ABC):
    """
    Abstract base class for read-only blockchain clients.

    A client is bound to one network for its whole lifetime.
    """

    def __init__(self, network: ChainNetwork):
        self.network = network
        self._initialized = False

    @property
    def network_name(self) -> str:
        return NETWORKS[self.network].name

    @abstractmethod
    async def initialize(self) -> None:
        """Establish the connection and verify the network is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection and release resources."""
        pass

    @abstractmethod
    async def get_chain_id(self) -> int:
        """Return the chain id reported by the node."""
        pass

    @abstractmethod
    async def read_contract(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """
        Call a view function and return its decoded result.

        Functions with several outputs return a tuple in ABI order.

        Raises:
            ContractCallError: If the call reverts, cannot be decoded or the
                transport fails
        """
        pass

    @property
    def is_initialized(self) -> bool:
        """Check if the client has been initialized."""
        return self._initialized

    def _ensure_initialized(self) -> None:
        """Raise error if client is not initialized."""
        if not self._initialized:
            raise ChainClientError(
                f"Read client for {self.network.value} not initialized. "
                "Call initialize() first."
            )
