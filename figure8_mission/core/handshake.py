"""
Offboard handshake: keep asking for OFFBOARD and arming until the vehicle
reports both, at most one request per retry interval.
"""

import logging

from ..utils.shared_state import VehicleState

logger = logging.getLogger(__name__)

OFFBOARD_MODE = "OFFBOARD"
LAND_MODE = "AUTO.LAND"


class OffboardHandshake:
    def __init__(self, commands, retry_interval_s: float, now: float):
        self.commands = commands
        self.retry_interval_s = retry_interval_s
        self.last_request = now
        self.land_requested = False

    def _retry_due(self, now: float) -> bool:
        return now - self.last_request >= self.retry_interval_s

    async def step(self, state: VehicleState, now: float) -> bool:
        """
        Run one tick of the handshake.

        Returns True when an OFFBOARD request was accepted on this tick,
        so the caller can restart phase timing from that instant.
        """
        if state.mode != OFFBOARD_MODE:
            if not self._retry_due(now):
                return False
            self.last_request = now
            if await self.commands.set_mode(OFFBOARD_MODE):
                logger.info("Offboard enabled")
                return True
            logger.warning("Offboard request rejected, retrying in %.1f s", self.retry_interval_s)
            return False

        if not state.armed and self._retry_due(now):
            self.last_request = now
            if await self.commands.arm(True):
                logger.info("Vehicle armed")
            else:
                logger.warning("Arming rejected, retrying in %.1f s", self.retry_interval_s)
        return False

    async def command_land(self) -> bool:
        """Request AUTO.LAND once. The outcome is logged, never retried."""
        if self.land_requested:
            return False
        self.land_requested = True

        ok = await self.commands.set_mode(LAND_MODE)
        if ok:
            logger.info("Phase 3: LAND mode initiated. Mission complete.")
        else:
            logger.warning("LAND mode request failed; relying on flight controller failsafes")
        return ok
