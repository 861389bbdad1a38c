"""
VoteFeed Exceptions

Every error raised towards the HTTP boundary derives from VoteFeedError and
carries the status code and the JSON body it is rendered with.
"""

from typing import Any


class VoteFeedError(Exception):
    """Base exception for all VoteFeed errors."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_response(self) -> dict[str, Any]:
        """Render the JSON body returned to the caller."""
        return {"error": self.error, "message": self.message, **self.context}


class ConfigurationError(VoteFeedError):
    """Raised when the contract address is missing or malformed."""

    error = "Configuration error"


class UpstreamReadError(VoteFeedError):
    """Raised when a request-level contract read fails (e.g. proposal count)."""

    error = "Internal server error"


class ProposalReadError(VoteFeedError):
    """
    Raised when one proposal cannot be read.

    The aggregator recovers from this locally; it only reaches the HTTP
    boundary through single-proposal lookups, as ProposalNotFoundError.
    """

    def __init__(self, proposal_id: int, cause: Exception) -> None:
        super().__init__(f"Failed to read proposal {proposal_id}: {cause}")
        self.proposal_id = proposal_id
        self.cause = cause


class ValidationError(VoteFeedError):
    """Base class for request validation failures."""

    status_code = 400
    error = "Invalid request"


class MissingParameterError(ValidationError):
    """Raised when a required query parameter is absent."""

    error = "Missing required parameter"

    def __init__(self, name: str, hint: str = "") -> None:
        message = f"The '{name}' query parameter is required"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)
        self.parameter = name


class InvalidParameterError(ValidationError):
    """Raised when a query parameter cannot be parsed."""

    error = "Invalid parameter"


class ProposalNotFoundError(VoteFeedError):
    """Raised when a referenced proposal id does not resolve."""

    status_code = 404
    error = "Proposal not found"

    def __init__(self, proposal_id: int | str) -> None:
        super().__init__(f"Proposal with ID {proposal_id} does not exist")
        self.proposal_id = proposal_id


class ProposalInactiveError(VoteFeedError):
    """Raised when voting on a proposal that has been closed."""

    status_code = 400
    error = "Proposal inactive"

    def __init__(self, proposal_id: int) -> None:
        super().__init__("This proposal is no longer active for voting")
        self.proposal_id = proposal_id


class MetadataValidationError(VoteFeedError):
    """Raised when an action manifest does not satisfy the action schema."""

    status_code = 400
    error = "Invalid metadata"

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, details=details or [])
