from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class VehicleState:
    connected: bool = False
    armed: bool = False
    mode: str = ""          # PX4 custom mode, e.g. "OFFBOARD", "AUTO.LAND"


@dataclass(frozen=True)
class Pose:
    # Local frame: x north, y east, z altitude (positive up)
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class TelemetryMirror:
    """
    Latest known vehicle state and local position.

    Written by the vehicle link (telemetry watchers or the simulator),
    read once per tick by the control loop. Values are passed through
    exactly as received.
    """

    def __init__(self):
        self._state = VehicleState()
        self._pose = Pose()

    def on_vehicle_state_update(self, state: VehicleState) -> None:
        self._state = state

    def on_pose_update(self, pose: Pose) -> None:
        self._pose = pose

    def current(self) -> Tuple[VehicleState, Pose]:
        return self._state, self._pose
