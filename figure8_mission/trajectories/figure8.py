"""
Figure-8 trajectory generator.

Closed-form reference positions for the takeoff hold and one
Lemniscate of Gerono, evaluated from elapsed phase time alone.

No PX4 / MAVSDK code here.
"""

import math

from ..utils.mission_phase import MissionPhase
from ..utils.shared_state import Pose


class Figure8Trajectory:
    def __init__(
        self,
        radius: float = 15.0,
        altitude: float = 6.0,
        omega: float = 0.3,
    ):
        self.R = radius
        self.z = altitude
        self.w = omega

    def hold_pose(self) -> Pose:
        return Pose(0.0, 0.0, self.z)

    def position_xy(self, t: float):
        """
        Compute XY reference at time t.

        x = R * sin(w t)
        y = R * sin(w t) * cos(w t)
        """
        angle = self.w * t
        x = self.R * math.sin(angle)
        y = self.R * math.sin(angle) * math.cos(angle)
        return x, y

    def duration(self) -> float:
        """
        Exact duration of one full figure-8 (one period of the parametrization).
        """
        return 2 * math.pi / self.w

    def compute_target(self, phase: MissionPhase, t: float) -> Pose:
        if phase is MissionPhase.TAKEOFF:
            return self.hold_pose()
        if phase is MissionPhase.FIGURE8:
            x, y = self.position_xy(t)
            return Pose(x, y, self.z)
        raise ValueError(f"no trajectory target for phase {phase.name}")
