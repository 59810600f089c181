import pytest

from figure8_mission.core.phase_machine import PhaseClock, PhaseMachine
from figure8_mission.trajectories.figure8 import Figure8Trajectory
from figure8_mission.utils.mission_phase import MissionPhase
from figure8_mission.utils.shared_state import Pose

HOLD_S = 15.0


@pytest.fixture
def traj():
    return Figure8Trajectory(radius=15.0, altitude=6.0, omega=0.3)


@pytest.fixture
def machine(traj):
    return PhaseMachine(traj, HOLD_S, now=100.0)


def enter_figure8(machine):
    machine.advance(100.0 + HOLD_S)
    assert machine.phase is MissionPhase.FIGURE8
    return 100.0 + HOLD_S


def test_phase_clock_pause_and_resume():
    clock = PhaseClock(10.0)
    assert clock.elapsed(12.0) == 2.0
    clock.pause(12.0)
    assert clock.elapsed(50.0) == 2.0
    clock.pause(30.0)  # already paused, keeps first pause point
    clock.resume(50.0)
    assert clock.elapsed(51.0) == 3.0
    clock.reset(60.0)
    assert clock.elapsed(60.5) == 0.5


def test_takeoff_holds_until_hold_time(machine):
    assert machine.advance(100.0) == Pose(0.0, 0.0, 6.0)
    assert machine.advance(114.99) == Pose(0.0, 0.0, 6.0)
    assert machine.phase is MissionPhase.TAKEOFF


def test_takeoff_to_figure8_resets_clock(machine):
    t0 = enter_figure8(machine)
    assert machine.elapsed(t0) == 0.0
    assert machine.elapsed(t0 + 1.0) == 1.0


@pytest.mark.parametrize("extra", [0.0, 0.05, 3.0, 1000.0])
def test_figure8_ends_after_one_period(machine, extra):
    t0 = enter_figure8(machine)
    target = machine.advance(t0 + machine.figure8_duration + extra + 1e-9)
    assert machine.phase is MissionPhase.LAND
    assert (target.x, target.y) == (0.0, 0.0)
    assert target.z == 6.0


def test_figure8_follows_trajectory_before_exit(machine, traj):
    t0 = enter_figure8(machine)
    t = machine.figure8_duration - 0.01
    target = machine.advance(t0 + t)
    assert machine.phase is MissionPhase.FIGURE8
    expected = traj.compute_target(MissionPhase.FIGURE8, t)
    assert (target.x, target.y) == pytest.approx((expected.x, expected.y), abs=1e-9)
    assert target.z == expected.z


def test_full_sequence_is_forward_only(machine):
    t0 = enter_figure8(machine)
    machine.advance(t0 + machine.figure8_duration + 1e-9)
    machine.complete(t0 + machine.figure8_duration + 1e-9)
    assert machine.phase is MissionPhase.COMPLETE
    assert machine.history == [
        MissionPhase.TAKEOFF,
        MissionPhase.FIGURE8,
        MissionPhase.LAND,
        MissionPhase.COMPLETE,
    ]


def test_complete_is_terminal(machine):
    t0 = enter_figure8(machine)
    machine.advance(t0 + machine.figure8_duration + 1e-9)
    machine.complete(t0 + machine.figure8_duration + 1e-9)
    held = machine.target
    assert machine.advance(t0 + 500.0) == held
    assert machine.phase is MissionPhase.COMPLETE
    with pytest.raises(ValueError):
        machine.complete(t0 + 501.0)


def test_complete_only_from_land(machine):
    with pytest.raises(ValueError):
        machine.complete(100.0)
    assert machine.phase is MissionPhase.TAKEOFF


def test_hold_pins_elapsed_time(machine):
    machine.advance(105.0)
    for now in (105.05, 106.0, 200.0, 400.0):
        machine.hold(now)
        assert machine.elapsed(now) == pytest.approx(5.05)
    # unguarded time is not counted once ticks resume
    machine.advance(400.0)
    machine.advance(409.9)
    assert machine.phase is MissionPhase.TAKEOFF
    machine.advance(410.0)
    assert machine.phase is MissionPhase.FIGURE8


def test_reset_clock_restarts_phase_timing(machine):
    machine.advance(110.0)
    machine.reset_clock(110.0)
    machine.advance(124.0)
    assert machine.phase is MissionPhase.TAKEOFF
    machine.advance(125.0)
    assert machine.phase is MissionPhase.FIGURE8


def test_land_keeps_centered_target_until_complete(machine):
    t0 = enter_figure8(machine)
    end = t0 + machine.figure8_duration + 1e-9
    landing = machine.advance(end)
    assert machine.phase is MissionPhase.LAND
    assert machine.advance(end + 1.0) == landing == Pose(0.0, 0.0, 6.0)
    assert machine.phase is MissionPhase.LAND
