"""
Single Figure-8 Offboard Mission

Climbs to the hover altitude, flies exactly one Lemniscate of Gerono,
then hands over to AUTO.LAND. The vehicle is driven entirely through the
offboard handshake: the mission streams position setpoints, requests
OFFBOARD and arming until PX4 accepts them, and times each phase only
while the vehicle is armed in OFFBOARD.

Run against PX4 SITL:
    figure8-mission --system-address udpin://0.0.0.0:14540

Dry run against the built-in simulated vehicle:
    figure8-mission --sim
"""

import argparse
import asyncio
import logging
from contextlib import suppress
from dataclasses import fields

from ..core.config import MissionConfig
from ..core.control_loop import ControlLoop
from ..core.offboard_helpers import Px4CommandChannel, Px4SetpointChannel
from ..core.px4_connection import connect_px4
from ..sim.simulated_vehicle import SimClock, SimulatedVehicle
from ..utils.shared_state import TelemetryMirror
from ..utils.telemetry_watchers import (
    watch_armed,
    watch_connection,
    watch_flight_mode,
    watch_position,
)

logger = logging.getLogger(__name__)


# ============================================================
# Helpers
# ============================================================

async def cancel_and_await(tasks):
    """Cancel tasks and await them to avoid warnings/unfinished coroutines."""
    for t in tasks:
        t.cancel()
    for t in tasks:
        with suppress(asyncio.CancelledError):
            await t


def build_arg_parser() -> argparse.ArgumentParser:
    defaults = MissionConfig()
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    for f in fields(MissionConfig):
        flag = "--" + f.name.replace("_", "-")
        parser.add_argument(flag, dest=f.name, type=type(getattr(defaults, f.name)),
                            default=getattr(defaults, f.name),
                            help=f"(default: {getattr(defaults, f.name)})")
    parser.add_argument("--sim", action="store_true",
                        help="Fly against the in-process simulated vehicle instead of PX4.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> MissionConfig:
    return MissionConfig(**{f.name: getattr(args, f.name) for f in fields(MissionConfig)})


# ============================================================
# Mission runners
# ============================================================

async def fly_px4(cfg: MissionConfig):
    drone = await connect_px4(cfg.system_address)
    mirror = TelemetryMirror()

    watchers = [
        asyncio.create_task(watch_connection(drone, mirror)),
        asyncio.create_task(watch_armed(drone, mirror)),
        asyncio.create_task(watch_flight_mode(drone, mirror)),
        asyncio.create_task(watch_position(drone, mirror)),
    ]

    loop = ControlLoop(
        cfg,
        mirror,
        commands=Px4CommandChannel(drone),
        setpoints=Px4SetpointChannel(drone, yaw_deg=cfg.yaw_deg),
    )
    try:
        await loop.run()
    finally:
        await cancel_and_await(watchers)


async def fly_sim(cfg: MissionConfig) -> SimulatedVehicle:
    clock = SimClock()
    mirror = TelemetryMirror()
    vehicle = SimulatedVehicle(mirror, clock)

    loop = ControlLoop(
        cfg,
        mirror,
        commands=vehicle,
        setpoints=vehicle,
        clock=clock.now,
        sleep=clock.sleep,
    )
    await loop.run()
    logger.info(
        "Simulated mission: %d setpoints published over %.1f s simulated time.",
        len(vehicle.setpoints), clock.now(),
    )
    return vehicle


# ============================================================
# Main mission entry point
# ============================================================

def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logging.getLogger("mavsdk").setLevel(logging.WARNING)

    try:
        cfg = config_from_args(args)
    except ValueError as e:
        logger.error("Invalid mission configuration: %s", e)
        return 2

    try:
        asyncio.run(fly_sim(cfg) if args.sim else fly_px4(cfg))
    except KeyboardInterrupt:
        logger.warning("Mission interrupted.")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
