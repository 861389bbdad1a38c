"""
VoteFeed Configuration Management

Centralized configuration using Pydantic Settings for type-safe environment
variable loading with validation.

The contract address and public base URL keep the environment variable names
used by the action client deployment (SMART_CONTRACT_ADDRESS,
NEXT_PUBLIC_BASE_URL); everything specific to this service is prefixed with
VOTEFEED_.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Literal

from eth_utils import is_address
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from votefeed.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Value used when SMART_CONTRACT_ADDRESS is not set
PLACEHOLDER_CONTRACT_ADDRESS = "0x123"

EVM_ADDRESS_LENGTH = 42


class ChainNetwork(str, Enum):
    """Networks the ProposalContract can be deployed on."""

    AVALANCHE = "avalanche"
    AVALANCHE_FUJI = "avalanche_fuji"  # Testnet


class NetworkInfo(BaseModel):
    """Static description of a supported network."""

    model_config = ConfigDict(frozen=True)

    chain_id: int
    name: str
    action_chain: str = Field(description="Chain key understood by the action client")
    rpc_url: str


NETWORKS: dict[ChainNetwork, NetworkInfo] = {
    ChainNetwork.AVALANCHE: NetworkInfo(
        chain_id=43114,
        name="Avalanche",
        action_chain="avalanche",
        rpc_url="https://api.avax.network/ext/bc/C/rpc",
    ),
    ChainNetwork.AVALANCHE_FUJI: NetworkInfo(
        chain_id=43113,
        name="Avalanche Fuji",
        action_chain="fuji",
        rpc_url="https://api.avax-test.network/ext/bc/C/rpc",
    ),
}


class ContractTarget(BaseModel):
    """
    The contract this service reads from and builds transactions for.

    Built once from Settings and injected into the services that need it,
    so tests can point them at any address without touching the environment.
    """

    model_config = ConfigDict(frozen=True)

    address: str
    network: ChainNetwork = ChainNetwork.AVALANCHE_FUJI

    @property
    def info(self) -> NetworkInfo:
        return NETWORKS[self.network]

    @property
    def chain_id(self) -> int:
        return self.info.chain_id

    @property
    def network_name(self) -> str:
        return self.info.name

    @property
    def is_configured(self) -> bool:
        """True when the address is set and is a well-formed EVM address."""
        if self.address == PLACEHOLDER_CONTRACT_ADDRESS:
            return False
        if len(self.address) < EVM_ADDRESS_LENGTH:
            return False
        return bool(is_address(self.address))

    def ensure_configured(self) -> None:
        """
        Raise ConfigurationError unless the address is usable.

        Raises:
            ConfigurationError: address is the placeholder, too short or malformed
        """
        if not self.is_configured:
            raise ConfigurationError(
                "Smart contract address not properly configured. "
                "Please set SMART_CONTRACT_ADDRESS environment variable.",
                contractAddress=self.address,
            )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ═══════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════
    app_name: str = Field(default="votefeed", description="Application name")
    app_env: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, ge=1, le=65535, description="API port")

    # ═══════════════════════════════════════════════════════════════
    # CONTRACT
    # ═══════════════════════════════════════════════════════════════
    smart_contract_address: str = Field(
        default=PLACEHOLDER_CONTRACT_ADDRESS,
        validation_alias=AliasChoices("SMART_CONTRACT_ADDRESS", "smart_contract_address"),
        description="ProposalContract address",
    )
    network: ChainNetwork = Field(
        default=ChainNetwork.AVALANCHE_FUJI,
        validation_alias=AliasChoices("VOTEFEED_NETWORK", "network"),
        description="Network the contract is deployed on",
    )
    rpc_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("VOTEFEED_RPC_URL", "rpc_url"),
        description="RPC endpoint override (defaults to the network's public RPC)",
    )
    rpc_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("VOTEFEED_RPC_TIMEOUT_SECONDS", "rpc_timeout_seconds"),
        description="HTTP provider timeout for RPC calls",
    )
    max_concurrent_reads: int = Field(
        default=8,
        ge=1,
        le=64,
        validation_alias=AliasChoices("VOTEFEED_MAX_CONCURRENT_READS", "max_concurrent_reads"),
        description="Upper bound on concurrent per-proposal reads",
    )

    # ═══════════════════════════════════════════════════════════════
    # PUBLIC URLS
    # ═══════════════════════════════════════════════════════════════
    base_url: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices("NEXT_PUBLIC_BASE_URL", "BASE_URL", "base_url"),
        description="Public base URL used for icons and action links",
    )
    public_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PUBLIC_URL", "public_url"),
        description="Asset base for the demo action (falls back to base_url)",
    )
    action_client_url: str = Field(
        default="https://app.sherry.social/action",
        validation_alias=AliasChoices("ACTION_CLIENT_URL", "action_client_url"),
        description="Action renderer that opens action URLs",
    )
    action_site_url: str = Field(
        default="https://sherry.social",
        validation_alias=AliasChoices("ACTION_SITE_URL", "action_site_url"),
        description="Site URL advertised in action metadata",
    )

    @field_validator("base_url", "public_url", "action_client_url")
    @classmethod
    def strip_trailing_slash(cls, v: str | None) -> str | None:
        """Normalize URLs so paths can be appended with a single slash."""
        if v is None:
            return v
        return v.rstrip("/")

    @field_validator("smart_contract_address")
    @classmethod
    def strip_address(cls, v: str) -> str:
        return v.strip()

    @property
    def effective_rpc_url(self) -> str:
        """RPC endpoint to connect to."""
        return self.rpc_url or NETWORKS[self.network].rpc_url

    @property
    def asset_base_url(self) -> str:
        return self.public_url or self.base_url

    def contract_target(self) -> ContractTarget:
        """Build the immutable contract target injected into services."""
        target = ContractTarget(address=self.smart_contract_address, network=self.network)
        if not target.is_configured:
            logger.warning(
                "SMART_CONTRACT_ADDRESS is not configured; proposal reads will fail "
                "with a configuration error"
            )
        return target


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
