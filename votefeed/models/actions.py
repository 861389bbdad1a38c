"""
Action Metadata Models

Schema for the self-describing action manifests rendered by the social
action client. A manifest describes up to four actions; each is either a
"blockchain" action (the client encodes and sends a contract call itself)
or a "dynamic" action (the client collects params and POSTs them to a path
on this service, which answers with an ExecutionResponse).

Manifests are built as plain dicts by votefeed.services.actions and
validated here with create_metadata().
"""

from typing import Annotated, Any, Literal

from eth_utils import is_address
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from votefeed.exceptions import MetadataValidationError

MAX_ACTIONS = 4

SUPPORTED_CHAINS = frozenset({"fuji", "avalanche", "alfajores", "celo", "monad-testnet"})

ParamType = Literal[
    "text",
    "textarea",
    "number",
    "email",
    "url",
    "datetime",
    "select",
    "radio",
    "boolean",
    "bool",
    "uint256",
    "address",
    "string",
]


class ActionBaseModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class SelectOption(ActionBaseModel):
    label: str = Field(min_length=1)
    value: str | int | bool
    description: str | None = None


class ActionParam(ActionBaseModel):
    """One input shown by the action client."""

    name: str = Field(min_length=1)
    label: str
    type: ParamType
    value: Any = None
    required: bool = False
    description: str | None = None
    fixed: bool | None = None
    options: list[SelectOption] | None = None

    @model_validator(mode="after")
    def check_options(self) -> "ActionParam":
        if self.type in ("select", "radio") and not self.options:
            raise ValueError(f"param {self.name!r} of type {self.type} needs options")
        return self


class ChainContext(ActionBaseModel):
    source: str
    destination: str | None = None

    @field_validator("source", "destination")
    @classmethod
    def check_chain(cls, v: str | None) -> str | None:
        if v is not None and v not in SUPPORTED_CHAINS:
            raise ValueError(f"unsupported chain {v!r}")
        return v


class BlockchainAction(ActionBaseModel):
    """An action the client executes directly against a contract."""

    type: Literal["blockchain"] = "blockchain"
    label: str = Field(min_length=1)
    description: str | None = None
    address: str
    abi: list[dict[str, Any]]
    function_name: str
    chains: ChainContext
    params: list[ActionParam] = Field(default_factory=list)
    amount: float | None = Field(default=None, ge=0)

    @field_validator("address")
    @classmethod
    def check_address(cls, v: str) -> str:
        if not is_address(v):
            raise ValueError(f"invalid contract address {v!r}")
        return v

    @model_validator(mode="after")
    def check_function(self) -> "BlockchainAction":
        entries = [
            e for e in self.abi
            if e.get("type") == "function" and e.get("name") == self.function_name
        ]
        if not entries:
            raise ValueError(f"function {self.function_name!r} is not in the ABI")
        inputs = entries[0].get("inputs", [])
        if self.params and len(self.params) != len(inputs):
            raise ValueError(
                f"{self.function_name} takes {len(inputs)} params, got {len(self.params)}"
            )
        return self


class DynamicAction(ActionBaseModel):
    """An action whose params are POSTed to a path on this service."""

    type: Literal["dynamic"] = "dynamic"
    label: str = Field(min_length=1)
    description: str | None = None
    chains: ChainContext
    path: str | None = None
    params: list[ActionParam] = Field(default_factory=list)

    @field_validator("path")
    @classmethod
    def check_path(cls, v: str | None) -> str | None:
        if v is not None and not (v.startswith("/") or v.startswith("http")):
            raise ValueError("path must be absolute ('/api/...') or a full URL")
        return v


Action = Annotated[BlockchainAction | DynamicAction, Field(discriminator="type")]


class ActionMetadata(ActionBaseModel):
    """A complete, validated action manifest."""

    url: str = Field(min_length=1)
    icon: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    base_url: str | None = None
    actions: list[Action] = Field(min_length=1, max_length=MAX_ACTIONS)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ExecutionResponse(ActionBaseModel):
    """Answer to a dynamic action: an unsigned transaction for the client to sign."""

    serialized_transaction: str
    chain_id: str = Field(description="Display name of the network, e.g. 'Avalanche Fuji'")

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def create_metadata(data: dict[str, Any] | ActionMetadata) -> ActionMetadata:
    """
    Validate an action manifest.

    Args:
        data: The manifest as a camelCase dict, or an already-built model

    Returns:
        The validated ActionMetadata

    Raises:
        MetadataValidationError: If the manifest violates the schema
    """
    if isinstance(data, ActionMetadata):
        data = data.model_dump(by_alias=True, exclude_none=True)
    try:
        return ActionMetadata.model_validate(data)
    except ValidationError as e:
        details = [
            {
                "loc": list(err.get("loc", [])),
                "type": err.get("type", "unknown"),
                "msg": err.get("msg", "Validation failed"),
            }
            for err in e.errors()
        ]
        raise MetadataValidationError(
            f"Action metadata failed validation ({e.error_count()} errors)",
            details=details,
        ) from e
