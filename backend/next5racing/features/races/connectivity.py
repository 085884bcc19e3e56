"""
Network reachability.

ReachabilitySignal is the boolean the refresh scheduler reads right before
each fetch. ConnectivityMonitor keeps one up to date by probing a URL in
the background.
"""

import logging
from typing import Optional

import httpx

from next5racing.shared.clock import PeriodicTask

logger = logging.getLogger(__name__)


class ReachabilitySignal:
    """Push-updated connectivity flag."""

    def __init__(self, connected: bool = True):
        self._connected = connected

    @property
    def is_connected(self) -> bool:
        return self._connected

    def update(self, connected: bool):
        if connected != self._connected:
            logger.info(f"Network {'reachable' if connected else 'unreachable'}")
        self._connected = connected


class ConnectivityMonitor(ReachabilitySignal):
    """
    Probes a URL periodically and updates the signal.

    Any HTTP response counts as reachable, whatever its status; only a
    transport failure counts as offline.

    Usage:
        monitor = ConnectivityMonitor("https://api.neds.com.au", interval=10)
        await monitor.start()
        # ... later ...
        await monitor.stop()
    """

    def __init__(
        self,
        probe_url: str,
        interval: float = 10.0,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(connected=False)
        self.probe_url = probe_url
        self.timeout = timeout
        self._transport = transport
        self._ticker = PeriodicTask(interval, self.check, name="connectivity-probe")

    async def start(self):
        """Probe once, then keep probing in the background."""
        await self.check()
        self._ticker.start()
        logger.info(f"Connectivity monitor started ({self.probe_url})")

    async def stop(self):
        await self._ticker.stop()
        logger.info("Connectivity monitor stopped")

    async def check(self) -> bool:
        """Run one probe and update the signal."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                await client.head(self.probe_url)
            connected = True
        except httpx.HTTPError as e:
            logger.debug(f"Connectivity probe failed: {e}")
            connected = False

        self.update(connected)
        return connected
