import logging

from mavsdk import System

logger = logging.getLogger(__name__)


async def connect_px4(system_address: str) -> System:
    """
    Open the MAVSDK link. Does not wait for the vehicle: the control loop
    waits for the `connected` flag reported by the telemetry watchers.
    """
    drone = System()
    logger.info("Connecting to %s", system_address)
    await drone.connect(system_address=system_address)
    return drone
