from dataclasses import dataclass


@dataclass
class MissionConfig:
    system_address: str = "udpin://0.0.0.0:14540"   # SITL default
    rate_hz: float = 20.0                 # setpoint stream, 0.05 s
    takeoff_z_m: float = 6.0
    takeoff_hold_s: float = 15.0
    radius_m: float = 15.0
    angular_speed: float = 0.3            # rad/s
    retry_interval_s: float = 5.0
    priming_count: int = 100
    yaw_deg: float = 0.0

    def __post_init__(self):
        for name in ("rate_hz", "angular_speed", "retry_interval_s", "takeoff_z_m"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("takeoff_hold_s", "radius_m", "priming_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")

    @property
    def period_s(self) -> float:
        return 1.0 / self.rate_hz
