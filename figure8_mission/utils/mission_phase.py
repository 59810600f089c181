import enum


class MissionPhase(enum.IntEnum):
    # Ordered by mission progression
    TAKEOFF = 1
    FIGURE8 = 2
    LAND = 3
    COMPLETE = 4
