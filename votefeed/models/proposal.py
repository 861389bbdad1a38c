"""
Proposal Read-Model

Proposals are derived from contract state on every request and never
persisted. Field names serialize in camelCase for the action client and the
proposal page.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Proposal(BaseModel):
    """
    A governance proposal combined with its current vote tally.

    total_votes is derived and always equals up_votes + down_votes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int = Field(ge=0, description="Dense index assigned by the contract")
    text: str
    creator: str
    timestamp: int = Field(ge=0, description="Creation time, seconds since epoch")
    is_active: bool
    up_votes: int = Field(default=0, ge=0)
    down_votes: int = Field(default=0, ge=0)

    @computed_field(alias="totalVotes")  # type: ignore[prop-decorator]
    @property
    def total_votes(self) -> int:
        return self.up_votes + self.down_votes

    @classmethod
    def from_contract(
        cls,
        proposal_id: int,
        proposal: Sequence[Any],
        vote_count: Sequence[Any],
    ) -> "Proposal":
        """
        Build a proposal from the raw getProposal / getVoteCount results.

        Args:
            proposal_id: The id the values were read for
            proposal: (text, creator, timestamp, isActive)
            vote_count: (upVotes, downVotes)

        Raises:
            ValueError: If either tuple has the wrong shape
        """
        if len(proposal) != 4:
            raise ValueError(f"getProposal returned {len(proposal)} values, expected 4")
        if len(vote_count) != 2:
            raise ValueError(f"getVoteCount returned {len(vote_count)} values, expected 2")

        text, creator, timestamp, is_active = proposal
        up_votes, down_votes = vote_count
        return cls(
            id=proposal_id,
            text=str(text),
            creator=str(creator),
            timestamp=int(timestamp),
            is_active=bool(is_active),
            up_votes=int(up_votes),
            down_votes=int(down_votes),
        )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ProposalList(BaseModel):
    """Active proposals, newest first."""

    proposals: list[Proposal] = Field(default_factory=list)
    message: str | None = None

    @property
    def total(self) -> int:
        return len(self.proposals)

    def to_response(self) -> dict[str, Any]:
        """Body of GET /api/proposals."""
        body: dict[str, Any] = {
            "proposals": [p.to_response() for p in self.proposals],
            "total": self.total,
            "status": "success",
        }
        if self.message:
            body["message"] = self.message
        return body
