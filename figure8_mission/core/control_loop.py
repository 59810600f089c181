"""
Fixed-rate control loop for the figure-8 mission.

Waits for the vehicle link, primes the setpoint stream, then on every
tick: drains telemetry, runs the offboard handshake, advances the mission
phase while armed in OFFBOARD, and publishes the setpoint until landing
is commanded. The offboard mode needs an uninterrupted stream, so nothing
inside a tick may block beyond the channel calls.
"""

import asyncio
import logging
import time

from ..trajectories.figure8 import Figure8Trajectory
from ..utils.mission_phase import MissionPhase
from ..utils.rate import Rate
from .handshake import OFFBOARD_MODE, OffboardHandshake
from .phase_machine import PhaseMachine

logger = logging.getLogger(__name__)


class ControlLoop:
    def __init__(
        self,
        config,
        mirror,
        commands,
        setpoints,
        clock=time.monotonic,
        sleep=asyncio.sleep,
    ):
        self.config = config
        self.mirror = mirror
        self.commands = commands
        self.setpoints = setpoints
        self.clock = clock
        self.rate = Rate(config.rate_hz, clock=clock, sleep=sleep)

        self.trajectory = Figure8Trajectory(
            radius=config.radius_m,
            altitude=config.takeoff_z_m,
            omega=config.angular_speed,
        )
        self.machine = None
        self.handshake = None

    @property
    def phase(self) -> MissionPhase:
        return self.machine.phase if self.machine else MissionPhase.TAKEOFF

    async def wait_for_connection(self) -> None:
        logger.info("Waiting for vehicle to connect...")
        while True:
            await asyncio.sleep(0)
            state, _ = self.mirror.current()
            if state.connected:
                break
            await self.rate.sleep()
        logger.info("Vehicle connected. Starting single figure-8 mission.")

    async def prime_setpoints(self) -> None:
        """The flight controller rejects OFFBOARD unless setpoints are already flowing."""
        hold = self.trajectory.hold_pose()
        for _ in range(self.config.priming_count):
            await self.setpoints.publish(hold)
            await asyncio.sleep(0)
            await self.rate.sleep()

    def start(self, now: float) -> None:
        self.machine = PhaseMachine(self.trajectory, self.config.takeoff_hold_s, now)
        self.handshake = OffboardHandshake(self.commands, self.config.retry_interval_s, now)
        logger.info(
            "Calculated duration for one full figure-8 loop: %.2f seconds.",
            self.machine.figure8_duration,
        )

    async def tick(self, now: float) -> None:
        state, _ = self.mirror.current()
        machine = self.machine

        if machine.phase < MissionPhase.LAND:
            if await self.handshake.step(state, now):
                # Phase timing starts when OFFBOARD is confirmed
                machine.reset_clock(now)

        if state.armed and state.mode == OFFBOARD_MODE:
            target = machine.advance(now)
            if machine.phase is MissionPhase.LAND:
                await self.handshake.command_land()
                machine.complete(now)
        else:
            machine.hold(now)
            target = machine.target

        if machine.phase < MissionPhase.LAND:
            await self.setpoints.publish(target)

    async def run(self) -> None:
        await self.wait_for_connection()
        await self.prime_setpoints()
        self.start(self.clock())

        while self.machine.phase is not MissionPhase.COMPLETE:
            # Let the vehicle link deliver pending telemetry before reading it
            await asyncio.sleep(0)
            await self.tick(self.clock())
            await self.rate.sleep()

        logger.info("Figure-8 mission finished.")
