"""
Mission phase state machine.

TAKEOFF -> FIGURE8 -> LAND -> COMPLETE, strictly forward. Phase time only
accrues while the vehicle is armed and in OFFBOARD; the control loop calls
`advance()` on those ticks and `hold()` on every other tick.
"""

import logging

from ..utils.log_throttle import LogThrottle
from ..utils.mission_phase import MissionPhase
from ..utils.shared_state import Pose

logger = logging.getLogger(__name__)

PROGRESS_LOG_PERIOD_S = 5.0


class PhaseClock:
    """Phase-entry timestamp that can be paused while the guard is not met."""

    def __init__(self, now: float):
        self._start = now
        self._paused_at = None

    def reset(self, now: float) -> None:
        self._start = now
        self._paused_at = None

    def pause(self, now: float) -> None:
        if self._paused_at is None:
            self._paused_at = now

    def resume(self, now: float) -> None:
        if self._paused_at is not None:
            self._start += now - self._paused_at
            self._paused_at = None

    def elapsed(self, now: float) -> float:
        ref = now if self._paused_at is None else self._paused_at
        return ref - self._start


class PhaseMachine:
    def __init__(self, trajectory, takeoff_hold_s: float, now: float):
        self.trajectory = trajectory
        self.takeoff_hold_s = takeoff_hold_s
        # Exit condition for the figure-8, fixed once per mission
        self.figure8_duration = trajectory.duration()

        self.phase = MissionPhase.TAKEOFF
        self.history = [self.phase]
        self.clock = PhaseClock(now)
        self.target = trajectory.hold_pose()
        self._progress_log = LogThrottle(logger, PROGRESS_LOG_PERIOD_S)

    def reset_clock(self, now: float) -> None:
        self.clock.reset(now)

    def hold(self, now: float) -> None:
        self.clock.pause(now)

    def elapsed(self, now: float) -> float:
        return self.clock.elapsed(now)

    def advance(self, now: float) -> Pose:
        """
        Evaluate one guarded tick and return the setpoint to publish.

        May move TAKEOFF -> FIGURE8 or FIGURE8 -> LAND. Leaving LAND is
        done by `complete()` once the land command has been issued.
        """
        self.clock.resume(now)
        t = self.clock.elapsed(now)

        if self.phase is MissionPhase.TAKEOFF:
            self.target = self.trajectory.compute_target(self.phase, t)
            if t >= self.takeoff_hold_s:
                logger.info(
                    "Phase 1 complete: holding %.1f m. Starting single figure-8 loop.",
                    self.target.z,
                )
                self._transition(MissionPhase.FIGURE8, now)

        elif self.phase is MissionPhase.FIGURE8:
            self.target = self.trajectory.compute_target(self.phase, t)
            if t >= self.figure8_duration:
                logger.info("Phase 2 complete: figure-8 loop finished. Initiating LAND.")
                # Land from the center of the pattern
                self.target = Pose(0.0, 0.0, self.target.z)
                self._transition(MissionPhase.LAND, now)
            else:
                self._progress_log.info(
                    now,
                    "FIGURE-8: x=%.1f, y=%.1f. Remaining time for one loop: %.1f s",
                    self.target.x, self.target.y, self.figure8_duration - t,
                )

        # LAND and COMPLETE keep the held target

        return self.target

    def complete(self, now: float) -> None:
        if self.phase is not MissionPhase.LAND:
            raise ValueError(f"cannot complete mission from {self.phase.name}")
        self._transition(MissionPhase.COMPLETE, now)

    def _transition(self, phase: MissionPhase, now: float) -> None:
        if phase != self.phase + 1:
            raise ValueError(f"illegal transition {self.phase.name} -> {phase.name}")
        self.phase = phase
        self.history.append(phase)
        self.clock.reset(now)
