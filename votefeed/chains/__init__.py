"""
Chain Client Package

Read-only blockchain access for VoteFeed.

Usage:
    from votefeed.chains import EVMReadClient
    from votefeed.config import ChainNetwork

    async def example():
        client = EVMReadClient(ChainNetwork.AVALANCHE_FUJI)
        await client.initialize()
        count = await client.read_contract(address, abi, "getProposalCount")
        await client.close()
"""

from .base_client import BaseReadClient, ChainClientError, ContractCallError
from .evm_client import EVMReadClient

__all__ = [
    "BaseReadClient",
    "ChainClientError",
    "ContractCallError",
    "EVMReadClient",
]
