"""
VoteFeed API Routes

- proposals: the active proposal feed (GET /api/proposals)
- proposal: create-proposal action (GET/POST /api/proposal)
- vote: vote action (GET/POST /api/vote)
- sherry: candidate-selection demo action (GET /api/sherry)
- pages: the proposal page (GET /)
"""

from . import pages, proposal, proposals, sherry, vote

__all__ = ["pages", "proposal", "proposals", "sherry", "vote"]
