"""
Archidekt proxy endpoint.

Forwards deck requests to the Archidekt API, rate-limited per client IP.
Successful responses are cached for a few minutes.
"""

import logging
from typing import Annotated, Any

from cachetools import TTLCache
from fastapi import APIRouter, Depends, HTTPException, Request, status

from shortfall.api.decks import get_archidekt_client
from shortfall.config import settings
from shortfall.services.archidekt import DECK_ID_PATTERN, ArchidektClient, ArchidektError
from shortfall.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/archidekt", tags=["archidekt"])

_rate_limiter = RateLimiter(
    max_requests=settings.rate_limit_max_requests,
    window_seconds=settings.rate_limit_window_seconds,
)

# Raw deck JSON by deck id; failures are never stored
_response_cache: TTLCache[str, dict[str, Any]] = TTLCache(
    maxsize=settings.archidekt_cache_max_entries,
    ttl=settings.archidekt_cache_ttl_seconds,
)


def get_rate_limiter() -> RateLimiter:
    """Dependency providing the proxy rate limiter."""
    return _rate_limiter


def get_response_cache() -> TTLCache[str, dict[str, Any]]:
    """Dependency providing the proxy response cache."""
    return _response_cache


def client_ip(request: Request) -> str:
    """First x-forwarded-for address, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client is not None:
        return request.client.host
    return "unknown"


@router.get("/{deck_id}")
async def proxy_deck(
    deck_id: str,
    request: Request,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    client: Annotated[ArchidektClient, Depends(get_archidekt_client)],
    cache: Annotated[TTLCache[str, dict[str, Any]], Depends(get_response_cache)],
) -> dict[str, Any]:
    """
    Fetch raw deck JSON from Archidekt.

    Returns 429 when the caller exceeds the rate limit, 400 for a
    non-numeric id, and Archidekt's own status for upstream errors.
    Successful responses are served from cache until they expire.
    """
    if limiter.is_limited(client_ip(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please try again in a minute.",
        )

    if not DECK_ID_PATTERN.match(deck_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid deck ID")

    cached = cache.get(deck_id)
    if cached is not None:
        return cached

    try:
        data = await client.fetch_raw(deck_id)
    except ArchidektError as e:
        if e.status_code is not None:
            raise HTTPException(
                status_code=e.status_code,
                detail=f"Archidekt API returned {e.status_code}",
            ) from e
        logger.error("archidekt_proxy_failed", extra={"deck_id": deck_id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch from Archidekt",
        ) from e

    cache[deck_id] = data
    return data
