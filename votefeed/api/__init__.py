"""
VoteFeed API

HTTP surface: the proposal feed, the social action endpoints and the
proposal page.
"""
