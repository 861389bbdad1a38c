"""
Proposal Read-Model Aggregator

Builds the list of active proposals from ProposalContract state:

1. Validate the configured contract address (no reads when it is unusable)
2. Read getProposalCount()
3. Read getProposal(id) and getVoteCount(id) for every id, concurrently
4. Drop ids whose reads fail, keeping the rest of the feed visible
5. Keep active proposals, newest first

Nothing is cached; every call observes the contract as it is now.
"""

import asyncio

import structlog

from votefeed.chains import BaseReadClient
from votefeed.config import ContractTarget
from votefeed.contracts import PROPOSAL_CONTRACT_ABI
from votefeed.exceptions import (
    ProposalNotFoundError,
    ProposalReadError,
    UpstreamReadError,
)
from votefeed.models import Proposal, ProposalList
from votefeed.monitoring import log_duration

logger = structlog.get_logger(__name__)

DEFAULT_MAX_CONCURRENT_READS = 8


class ProposalAggregator:
    """
    Read-model over a single ProposalContract.

    Stateless between calls: the target and client are injected and never
    mutated, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        client: BaseReadClient,
        target: ContractTarget,
        max_concurrent_reads: int = DEFAULT_MAX_CONCURRENT_READS,
    ) -> None:
        """
        Args:
            client: Read client bound to target.network
            target: Contract address and network
            max_concurrent_reads: Upper bound on proposals fetched at once
        """
        if max_concurrent_reads < 1:
            raise ValueError("max_concurrent_reads must be at least 1")
        self.client = client
        self.target = target
        self.max_concurrent_reads = max_concurrent_reads

    async def get_proposal_count(self) -> int:
        """
        Read the number of proposals ever created.

        Raises:
            ConfigurationError: If the contract address is unusable
            UpstreamReadError: If the read fails
        """
        self.target.ensure_configured()
        try:
            count = await self.client.read_contract(
                self.target.address, PROPOSAL_CONTRACT_ABI, "getProposalCount"
            )
            count = int(count)
            if count < 0:
                raise ValueError(f"getProposalCount returned {count}")
        except Exception as e:
            logger.error(
                "proposal_count_fetch_failed",
                contract=self.target.address,
                network=self.target.network_name,
                error=str(e),
            )
            raise UpstreamReadError(
                "Failed to fetch proposals",
                details=str(e),
                contractAddress=self.target.address,
                network=self.target.network_name,
            ) from e
        return count

    async def fetch_proposal(self, proposal_id: int) -> Proposal:
        """
        Read one proposal and its vote tally.

        Both reads have settled by the time this returns or raises.

        Raises:
            ProposalReadError: If either read fails or returns a malformed value
        """
        args = [proposal_id]
        results = await asyncio.gather(
            self.client.read_contract(
                self.target.address, PROPOSAL_CONTRACT_ABI, "getProposal", args
            ),
            self.client.read_contract(
                self.target.address, PROPOSAL_CONTRACT_ABI, "getVoteCount", args
            ),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                raise ProposalReadError(proposal_id, result) from result
            if isinstance(result, BaseException):
                raise result

        proposal, vote_count = results
        try:
            return Proposal.from_contract(proposal_id, proposal, vote_count)
        except Exception as e:
            raise ProposalReadError(proposal_id, e) from e

    async def get_proposal(self, proposal_id: int) -> Proposal:
        """
        Look up a single proposal by id.

        A failed read is reported as "not found": the contract reverts for
        ids outside [0, count).

        Raises:
            ConfigurationError: If the contract address is unusable
            ProposalNotFoundError: If the proposal cannot be read
        """
        self.target.ensure_configured()
        try:
            return await self.fetch_proposal(proposal_id)
        except ProposalReadError as e:
            logger.warning(
                "proposal_lookup_failed",
                proposal_id=proposal_id,
                error=str(e.cause),
            )
            raise ProposalNotFoundError(proposal_id) from e

    async def _fetch_isolated(
        self,
        proposal_id: int,
        semaphore: asyncio.Semaphore,
    ) -> Proposal | None:
        """Fetch one proposal; a failure is logged and yields None."""
        async with semaphore:
            try:
                proposal = await self.fetch_proposal(proposal_id)
            except ProposalReadError as e:
                logger.warning(
                    "proposal_fetch_failed",
                    proposal_id=proposal_id,
                    error=str(e.cause),
                )
                return None
        logger.debug("proposal_fetched", proposal_id=proposal_id, text=proposal.text)
        return proposal

    async def fetch_all(self, count: int) -> list[Proposal]:
        """
        Fetch ids 0..count-1, skipping the ones that fail.

        The result is in ascending id order regardless of completion order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrent_reads)
        results = await asyncio.gather(
            *(self._fetch_isolated(i, semaphore) for i in range(count))
        )
        return [p for p in results if p is not None]

    async def list_active_proposals(self) -> ProposalList:
        """
        Build the active proposal feed.

        Returns:
            Active proposals sorted by timestamp descending; proposals created
            in the same second keep ascending id order.

        Raises:
            ConfigurationError: If the contract address is unusable
            UpstreamReadError: If the proposal count cannot be read
        """
        logger.info(
            "proposal_aggregation_started",
            contract=self.target.address,
            network=self.target.network_name,
        )
        count = await self.get_proposal_count()
        logger.info("proposal_count_fetched", count=count)

        if count == 0:
            return ProposalList(message="No proposals found in the contract")

        with log_duration(logger, "proposal_fetch", count=count):
            fetched = await self.fetch_all(count)

        active = [p for p in fetched if p.is_active]
        # sorted() is stable, so equal timestamps stay in id order
        active = sorted(active, key=lambda p: p.timestamp, reverse=True)

        logger.info(
            "active_proposals_returned",
            active=len(active),
            fetched=len(fetched),
            skipped=count - len(fetched),
        )
        return ProposalList(proposals=active)
