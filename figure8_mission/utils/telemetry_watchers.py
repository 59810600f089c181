from dataclasses import replace

from mavsdk import System
from mavsdk.telemetry import FlightMode

from .shared_state import Pose, TelemetryMirror

# MAVSDK flight modes -> PX4 custom mode names
PX4_MODE_NAMES = {
    FlightMode.READY: "AUTO.READY",
    FlightMode.TAKEOFF: "AUTO.TAKEOFF",
    FlightMode.HOLD: "AUTO.LOITER",
    FlightMode.MISSION: "AUTO.MISSION",
    FlightMode.RETURN_TO_LAUNCH: "AUTO.RTL",
    FlightMode.LAND: "AUTO.LAND",
    FlightMode.OFFBOARD: "OFFBOARD",
    FlightMode.FOLLOW_ME: "AUTO.FOLLOW_TARGET",
    FlightMode.MANUAL: "MANUAL",
    FlightMode.ALTCTL: "ALTCTL",
    FlightMode.POSCTL: "POSCTL",
    FlightMode.ACRO: "ACRO",
    FlightMode.STABILIZED: "STABILIZED",
}


def px4_mode_name(mode: FlightMode) -> str:
    return PX4_MODE_NAMES.get(mode, getattr(mode, "name", str(mode)))


async def watch_connection(drone: System, mirror: TelemetryMirror):
    async for conn in drone.core.connection_state():
        state, _ = mirror.current()
        mirror.on_vehicle_state_update(replace(state, connected=conn.is_connected))


async def watch_armed(drone: System, mirror: TelemetryMirror):
    async for armed in drone.telemetry.armed():
        state, _ = mirror.current()
        mirror.on_vehicle_state_update(replace(state, armed=armed))


async def watch_flight_mode(drone: System, mirror: TelemetryMirror):
    async for mode in drone.telemetry.flight_mode():
        state, _ = mirror.current()
        mirror.on_vehicle_state_update(replace(state, mode=px4_mode_name(mode)))


async def watch_position(drone: System, mirror: TelemetryMirror):
    async for data in drone.telemetry.position_velocity_ned():
        pos = data.position
        mirror.on_pose_update(Pose(pos.north_m, pos.east_m, -pos.down_m))
