"""
VoteFeed - FastAPI Dependencies
Dependency injection for API routes.

Provides:
- Settings
- The contract target and read client created in the app lifespan
- Aggregator and transaction builder instances
- The public URL of the current request
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request

from votefeed.chains import BaseReadClient, ChainClientError
from votefeed.config import ContractTarget, Settings
from votefeed.exceptions import UpstreamReadError
from votefeed.services import ProposalAggregator, TransactionBuilder

logger = structlog.get_logger(__name__)


# =============================================================================
# Settings
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# =============================================================================
# Chain access
# =============================================================================

def get_contract_target(request: Request) -> ContractTarget:
    return request.app.state.contract_target


ContractTargetDep = Annotated[ContractTarget, Depends(get_contract_target)]


async def get_read_client(request: Request, target: ContractTargetDep) -> BaseReadClient:
    """
    Get the read client, reconnecting if startup could not reach the RPC.

    Raises:
        ConfigurationError: If the contract address is unusable
        UpstreamReadError: If the client still cannot connect
    """
    target.ensure_configured()
    client: BaseReadClient = request.app.state.read_client
    if client.is_initialized:
        return client

    try:
        await client.initialize()
    except ChainClientError as e:
        logger.error("read_client_unavailable", network=client.network_name, error=str(e))
        raise UpstreamReadError(
            "Blockchain client unavailable",
            details=str(e),
            contractAddress=target.address,
            network=client.network_name,
        ) from e
    logger.info("read_client_reconnected", network=client.network_name)
    return client


ReadClientDep = Annotated[BaseReadClient, Depends(get_read_client)]


# =============================================================================
# Services
# =============================================================================

def get_aggregator(
    client: ReadClientDep,
    target: ContractTargetDep,
    settings: SettingsDep,
) -> ProposalAggregator:
    return ProposalAggregator(
        client,
        target,
        max_concurrent_reads=settings.max_concurrent_reads,
    )


AggregatorDep = Annotated[ProposalAggregator, Depends(get_aggregator)]


def get_transaction_builder(target: ContractTargetDep) -> TransactionBuilder:
    return TransactionBuilder(target)


TransactionBuilderDep = Annotated[TransactionBuilder, Depends(get_transaction_builder)]


# =============================================================================
# Request
# =============================================================================

def get_server_url(request: Request) -> str:
    """
    Public origin of this request, e.g. "https://votes.example.com".

    Honors X-Forwarded-Proto so manifests served behind a TLS-terminating
    proxy advertise https.
    """
    proto = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return f"{proto.split(',')[0].strip()}://{host}"


ServerUrlDep = Annotated[str, Depends(get_server_url)]
