"""
EVM Read Client Implementation

Concrete read client for EVM-compatible chains (Avalanche C-Chain and its
Fuji testnet). It uses web3.py for all blockchain interactions.
"""

import logging
from collections.abc import Sequence
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3

from ..config import NETWORKS, ChainNetwork
from .base_client import (
    BaseReadClient,
    ChainClientError,
    ContractCallError,
)

logger: logging.Logger = logging.getLogger(__name__)


class EVMReadClient(BaseReadClient):
    """
    Read-only client for EVM-compatible blockchains.

    The client is not connected until initialize() is called, so it can be
    constructed at import or configuration time and connected inside the
    application lifespan.
    """

    def __init__(
        self,
        network: ChainNetwork,
        rpc_url: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Args:
            network: The network to connect to
            rpc_url: RPC endpoint override; defaults to the network's public RPC
            timeout_seconds: Request timeout handed to the HTTP provider
        """
        super().__init__(network)
        self._rpc_endpoint = rpc_url or NETWORKS[network].rpc_url
        self._timeout_seconds = timeout_seconds
        self._w3: AsyncWeb3 | None = None

    def _get_w3(self) -> AsyncWeb3:
        """Return the Web3 instance, raising if not initialized."""
        if self._w3 is None:
            raise ChainClientError(
                f"Read client for {self.network.value} not initialized. "
                "Call initialize() first."
            )
        return self._w3

    async def initialize(self) -> None:
        """
        Connect to the RPC endpoint and verify the chain id.

        A chain id that differs from the configured network is logged but
        not fatal, so private forks and local nodes remain usable.
        """
        self._w3 = AsyncWeb3(
            AsyncHTTPProvider(
                self._rpc_endpoint,
                request_kwargs={"timeout": self._timeout_seconds},
            )
        )

        try:
            chain_id: int = await self._w3.eth.chain_id  # type: ignore[misc]
        except Exception as e:
            self._w3 = None
            raise ChainClientError(f"Failed to connect to {self.network.value}: {e}") from e

        expected = NETWORKS[self.network].chain_id
        if chain_id != expected:
            logger.warning(
                f"Connected to chain_id {chain_id}, expected {expected} for {self.network.value}"
            )
        else:
            logger.info(f"Connected to {self.network.value} (chain_id: {chain_id})")

        self._initialized = True

    async def close(self) -> None:
        """Dispose of the provider session."""
        if self._w3 and hasattr(self._w3.provider, "disconnect"):
            await self._w3.provider.disconnect()
        self._w3 = None
        self._initialized = False

    async def get_chain_id(self) -> int:
        self._ensure_initialized()
        w3 = self._get_w3()
        result: int = await w3.eth.chain_id  # type: ignore[misc]
        return result

    async def read_contract(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """
        Call a view function on a contract.

        No transaction is sent and no gas is consumed.
        """
        self._ensure_initialized()
        w3 = self._get_w3()

        try:
            contract: Any = w3.eth.contract(
                address=w3.to_checksum_address(address), abi=abi
            )
            func: Any = getattr(contract.functions, function_name)
            return await func(*args).call()
        except ChainClientError:
            raise
        except Exception as e:
            raise ContractCallError(function_name, e) from e
