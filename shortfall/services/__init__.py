"""
Shortfall services.

External collaborators: Archidekt deck import and request rate limiting.
"""

from shortfall.services.archidekt import (
    ArchidektClient,
    ArchidektError,
    DeckNotFoundError,
    extract_deck_id,
    parse_deck_response,
)
from shortfall.services.rate_limiter import RateLimiter

__all__ = [
    "ArchidektClient",
    "ArchidektError",
    "DeckNotFoundError",
    "RateLimiter",
    "extract_deck_id",
    "parse_deck_response",
]
