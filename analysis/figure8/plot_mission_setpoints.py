import asyncio
from pathlib import Path

import matplotlib.pyplot as plt

# --------------------------------------------------
# Mission + simulator (single source of truth)
# --------------------------------------------------

from figure8_mission.core.config import MissionConfig
from figure8_mission.missions.figure8_mission import fly_sim


# --------------------------------------------------
# Paths (mission-local outputs)
# --------------------------------------------------

OUTPUT_DIR = Path(__file__).resolve().parent / "outputs"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

OUTPUT_XY_PNG = OUTPUT_DIR / "setpoints_xy.png"
OUTPUT_TS_PNG = OUTPUT_DIR / "setpoints_time_series.png"


# --------------------------------------------------
# Run the mission against the simulated vehicle
# --------------------------------------------------

cfg = MissionConfig()
vehicle = asyncio.run(fly_sim(cfg))

t = [ti for ti, _ in vehicle.setpoints]
x = [p.x for _, p in vehicle.setpoints]
y = [p.y for _, p in vehicle.setpoints]
z = [p.z for _, p in vehicle.setpoints]

offboard_t = [c.t for c in vehicle.requests("set_mode", "OFFBOARD") if c.accepted]
arm_t = [c.t for c in vehicle.requests("arm", True) if c.accepted]
land_t = [c.t for c in vehicle.requests("set_mode", "AUTO.LAND")]


# --------------------------------------------------
# Plot XY
# --------------------------------------------------

plt.figure(figsize=(7, 7))

plt.plot(x, y, linewidth=2, label="Published setpoints")
plt.scatter([0.0], [0.0], marker="x", color="k", label="Origin / landing point")

plt.xlabel("North [m]")
plt.ylabel("East [m]")
plt.title(f"Figure-8 setpoints (R={cfg.radius_m:g} m, w={cfg.angular_speed:g} rad/s)")
plt.axis("equal")
plt.grid(True)
plt.legend()

plt.tight_layout()
plt.savefig(OUTPUT_XY_PNG, dpi=200)
plt.close()

print(f"Saved plot → {OUTPUT_XY_PNG}")


# --------------------------------------------------
# Plot time series with handshake events
# --------------------------------------------------

fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)

for ax, values, label in zip(axes, (x, y, z), ("x north [m]", "y east [m]", "z up [m]")):
    ax.plot(t, values, linewidth=1.5)
    ax.set_ylabel(label)
    ax.grid(True)
    for ti in offboard_t:
        ax.axvline(ti, color="tab:green", linestyle="--", linewidth=1)
    for ti in arm_t:
        ax.axvline(ti, color="tab:orange", linestyle="--", linewidth=1)
    for ti in land_t:
        ax.axvline(ti, color="tab:red", linestyle="--", linewidth=1)

axes[-1].set_xlabel("Simulated time [s]")
axes[0].set_title("Setpoint stream (green: OFFBOARD, orange: armed, red: LAND)")

plt.tight_layout()
plt.savefig(OUTPUT_TS_PNG, dpi=200)
plt.close()

print(f"Saved plot → {OUTPUT_TS_PNG}")
