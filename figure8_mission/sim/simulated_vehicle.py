"""
In-process stand-in for the PX4 vehicle link, command channel and
setpoint channel, running on simulated time.

Telemetry produced by a command or setpoint is delivered to the mirror on
the next simulated sleep, the same way real telemetry arrives between
ticks. Position tracking is ideal: the vehicle sits on its last setpoint
while in OFFBOARD and descends to the ground once landing.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Tuple

from ..utils.shared_state import Pose, TelemetryMirror, VehicleState

# PX4 leaves OFFBOARD (and refuses to enter it) without a recent setpoint
OFFBOARD_SETPOINT_TIMEOUT_S = 0.5


class SimClock:
    def __init__(self, start: float = 0.0):
        self.t = start
        self._listeners = []

    def now(self) -> float:
        return self.t

    def on_advance(self, callback) -> None:
        self._listeners.append(callback)

    async def sleep(self, dt: float) -> None:
        self.t += max(0.0, dt)
        for callback in self._listeners:
            callback(self.t)
        await asyncio.sleep(0)


@dataclass
class CommandRecord:
    t: float
    command: str
    value: object
    accepted: bool


class SimulatedVehicle:
    def __init__(
        self,
        mirror: TelemetryMirror,
        clock: SimClock,
        *,
        connect_after_s: float = 0.5,
        reject_mode_requests: int = 0,
        reject_arm_requests: int = 0,
        reject_land: bool = False,
        start_mode: str = "POSCTL",
    ):
        self.mirror = mirror
        self.clock = clock
        self.connect_after_s = connect_after_s
        self.reject_mode_requests = reject_mode_requests
        self.reject_arm_requests = reject_arm_requests
        self.reject_land = reject_land

        self.connected = False
        self.armed = False
        self.mode = start_mode
        self.pose = Pose()
        self.last_setpoint_t = None

        self.setpoints: List[Tuple[float, Pose]] = []
        self.commands: List[CommandRecord] = []

        clock.on_advance(self._update)

    # ---- vehicle link ----

    def _update(self, now: float) -> None:
        if not self.connected and now >= self.connect_after_s:
            self.connected = True

        if self.mode == "OFFBOARD" and not self._stream_alive(now):
            self.mode = "AUTO.LOITER"
        if self.mode == "AUTO.LAND" and self.pose.z > 0.0:
            self.pose = Pose(self.pose.x, self.pose.y, max(0.0, self.pose.z - 0.05))
            if self.pose.z == 0.0:
                self.armed = False

        self.mirror.on_vehicle_state_update(
            VehicleState(connected=self.connected, armed=self.armed, mode=self.mode)
        )
        self.mirror.on_pose_update(self.pose)

    def _stream_alive(self, now: float) -> bool:
        return (
            self.last_setpoint_t is not None
            and now - self.last_setpoint_t <= OFFBOARD_SETPOINT_TIMEOUT_S
        )

    # ---- command channel ----

    async def set_mode(self, mode: str) -> bool:
        now = self.clock.now()
        if mode == "OFFBOARD":
            accepted = self._stream_alive(now) and self.reject_mode_requests <= 0
            self.reject_mode_requests -= 1
        elif mode == "AUTO.LAND":
            accepted = not self.reject_land
        else:
            accepted = True

        if accepted:
            self.mode = mode
        self.commands.append(CommandRecord(now, "set_mode", mode, accepted))
        return accepted

    async def arm(self, value: bool) -> bool:
        now = self.clock.now()
        accepted = self.reject_arm_requests <= 0
        self.reject_arm_requests -= 1
        if accepted:
            self.armed = value
        self.commands.append(CommandRecord(now, "arm", value, accepted))
        return accepted

    # ---- setpoint channel ----

    async def publish(self, pose: Pose) -> None:
        now = self.clock.now()
        self.last_setpoint_t = now
        self.setpoints.append((now, pose))
        if self.armed and self.mode == "OFFBOARD":
            self.pose = pose

    def requests(self, command: str, value=None) -> List[CommandRecord]:
        return [
            c for c in self.commands
            if c.command == command and (value is None or c.value == value)
        ]
