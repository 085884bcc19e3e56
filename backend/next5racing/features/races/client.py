"""
Racing feed client.

Fetches the next-to-go races from the upstream racing API and turns the
JSON payload into a RaceBatch. Every failure surfaces as a RaceFeedError
subclass so callers only have to handle one hierarchy.

Feed notes:
- Fixed request size (count=10), no pagination
- Body carries its own `status`; anything but 200 is a server error
- A body without `data` means "nothing to show", not a failure
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from pydantic import ValidationError

from next5racing.config import settings
from .config import RaceBoardConfig
from .models import RaceBatch
from .schemas import RaceFeedResponse

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class RaceFeedError(Exception):
    """Base racing feed error."""
    pass


class RaceFeedConnectivityError(RaceFeedError):
    """Network unreachable; raised before any request is made."""

    def __init__(self, message: str = RaceBoardConfig.NO_CONNECTION_MESSAGE):
        super().__init__(message)


class RaceFeedFetchError(RaceFeedError):
    """Transport or server failure."""
    pass


class RaceFeedNetworkError(RaceFeedFetchError):
    """Request never got a response."""

    def __init__(self, underlying: Exception):
        self.underlying = underlying
        super().__init__(f"Network error: {underlying}")


class RaceFeedServerError(RaceFeedFetchError):
    """Non-success HTTP status or body status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Server error: {status}")


class RaceFeedParseError(RaceFeedFetchError):
    """Body could not be decoded."""

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse data: {detail}")


class RaceFeedEmptyError(RaceFeedError):
    """Feed answered but carried no race data."""

    def __init__(self, message: str = "No race data available"):
        super().__init__(message)


# =============================================================================
# Client
# =============================================================================

class RaceFeedClient(ABC):
    """
    Source of race batches.

    Implementations must be cancellable: a cancelled `fetch_races` call
    must not touch shared state.
    """

    @abstractmethod
    async def fetch_races(self) -> RaceBatch:
        """
        Fetch the current next-to-go races.

        Raises:
            RaceFeedError: on any failure
        """
        pass


class NedsRaceFeedClient(RaceFeedClient):
    """
    Async httpx client for the Neds racing API.

    Usage:
        client = NedsRaceFeedClient()
        batch = await client.fetch_races()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        race_count: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.feed_base_url
        self.race_count = race_count or settings.feed_race_count
        self.timeout = timeout or settings.feed_timeout_seconds
        self._transport = transport

    async def fetch_races(self) -> RaceBatch:
        params = {"method": "nextraces", "count": self.race_count}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.base_url,
                    params=params,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning(f"Race feed request failed: {e}")
            raise RaceFeedNetworkError(e) from e

        if not response.is_success:
            logger.warning(
                f"Race feed returned {response.status_code}: {response.text[:200]}"
            )
            raise RaceFeedServerError(response.status_code)

        try:
            payload = RaceFeedResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise RaceFeedParseError(str(e)) from e

        if payload.status != 200:
            raise RaceFeedServerError(payload.status or 0)

        if payload.data is None:
            raise RaceFeedEmptyError()

        batch = payload.data.to_batch()
        logger.debug(f"Fetched {len(batch)} races from feed")
        return batch
