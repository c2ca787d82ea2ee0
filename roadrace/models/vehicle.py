import copy


class VehicleStats:
    def __init__(self, name, max_speed, accel, handling, color):
        self.name = name
        self.max_speed = max_speed      # px/s
        self.acceleration = accel       # px/s^2
        self.handling = handling        # turn responsiveness
        self.color = color

    def copy(self):
        return copy.copy(self)

    def scaled(self, factor):
        """Independent copy with speed, acceleration and handling scaled."""
        new_stats = self.copy()
        new_stats.max_speed *= factor
        new_stats.acceleration *= factor
        new_stats.handling *= factor
        return new_stats


# Vehicle Definitions
SPORTS_COUPE = VehicleStats(
    name="Sports Coupe",
    max_speed=300.0,
    accel=420.0,
    handling=1.0,
    color=(220, 60, 60)
)

MUSCLE_CAR = VehicleStats(
    name="Muscle Car",
    max_speed=340.0,
    accel=380.0,
    handling=0.85,
    color=(240, 180, 40)
)

RALLY_HATCH = VehicleStats(
    name="Rally Hatch",
    max_speed=285.0,
    accel=520.0,
    handling=1.25,
    color=(60, 140, 230)
)

VEHICLES = [SPORTS_COUPE, MUSCLE_CAR, RALLY_HATCH]


def get_vehicle(index):
    """Fresh copy of a vehicle preset, so callers never touch the template."""
    return VEHICLES[index].copy()
