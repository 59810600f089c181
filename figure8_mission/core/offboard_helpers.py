"""
MAVSDK adapters for the command and setpoint channels used by the
control loop.
"""

import logging

from mavsdk import System
from mavsdk.action import ActionError
from mavsdk.offboard import OffboardError, PositionNedYaw

from ..utils.shared_state import Pose

logger = logging.getLogger(__name__)


class Px4CommandChannel:
    """Mode-change and arming requests; every call returns success as a bool."""

    def __init__(self, drone: System):
        self.drone = drone
        self._mode_requests = {
            "OFFBOARD": self.drone.offboard.start,
            "AUTO.LAND": self.drone.action.land,
            "AUTO.LOITER": self.drone.action.hold,
            "AUTO.RTL": self.drone.action.return_to_launch,
        }

    async def set_mode(self, mode: str) -> bool:
        request = self._mode_requests.get(mode)
        if request is None:
            logger.warning("Mode %s cannot be requested through MAVSDK", mode)
            return False
        try:
            await request()
        except OffboardError as e:
            logger.warning("Failed to start offboard: %s", e._result.result)
            return False
        except ActionError as e:
            logger.warning("Failed to switch to %s: %s", mode, e._result.result)
            return False
        return True

    async def arm(self, value: bool) -> bool:
        try:
            if value:
                await self.drone.action.arm()
            else:
                await self.drone.action.disarm()
        except ActionError as e:
            logger.warning("%s failed: %s", "Arming" if value else "Disarming", e._result.result)
            return False
        return True


class Px4SetpointChannel:
    def __init__(self, drone: System, yaw_deg: float = 0.0):
        self.drone = drone
        self.yaw_deg = yaw_deg

    async def publish(self, pose: Pose) -> None:
        await self.drone.offboard.set_position_ned(
            PositionNedYaw(pose.x, pose.y, -pose.z, self.yaw_deg)
        )
