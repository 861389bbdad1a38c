"""
VoteFeed - Binary Public Voting Feed

Social-action endpoints over an on-chain ProposalContract:
proposal creation, proposal listing and up/down voting.
"""

__version__ = "0.1.0"
