import pytest

from figure8_mission.core.config import MissionConfig
from figure8_mission.sim.simulated_vehicle import SimClock
from figure8_mission.utils.shared_state import TelemetryMirror


@pytest.fixture
def cfg():
    return MissionConfig()


@pytest.fixture
def sim():
    return SimClock(), TelemetryMirror()
