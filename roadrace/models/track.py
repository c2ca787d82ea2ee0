import pygame


class Track:
    def __init__(self, name, road, finish, start, friction, waypoints,
                 terrain_color, road_color):
        self.name = name
        self.road = road            # road bounds, cars are clamped inside
        self.finish = finish        # finish line rectangle
        self.start_x, self.start_y = start
        self.friction = friction    # per-step velocity multiplier
        self.waypoints = waypoints  # NPC route, cyclic

        # Visual theme
        self.terrain_color = terrain_color
        self.road_color = road_color


# name, road (x, y, w, h), finish (x, y, w, h), start, friction, waypoints, terrain, road
TRACK_PRESETS = [
    (
        "City Circuit",
        (80, 80, 840, 540),
        (900, 330, 20, 80),  # right side
        (160, 340),
        0.985,
        [(140, 140), (860, 140), (860, 560), (140, 560)],
        (30, 55, 40),
        (55, 55, 60),
    ),
    (
        "Desert Loop",
        (90, 110, 820, 500),
        (90, 330, 20, 80),  # left side
        (820, 360),
        0.975,
        [(820, 160), (160, 160), (160, 560), (820, 560)],
        (160, 130, 70),
        (80, 70, 60),
    ),
    (
        "Snow Run",
        (110, 90, 800, 520),
        (480, 90, 80, 20),  # top
        (520, 540),
        0.968,
        [(860, 520), (860, 140), (160, 140), (160, 520)],
        (190, 210, 225),
        (70, 80, 90),
    ),
]

TRACK_COUNT = len(TRACK_PRESETS)


def track_name(index):
    return TRACK_PRESETS[index][0]


def make_track(index):
    """Build a fresh Track for a race. Rects are new objects every call."""
    name, road, finish, start, friction, waypoints, terrain, road_color = TRACK_PRESETS[index]
    return Track(
        name,
        pygame.Rect(road),
        pygame.Rect(finish),
        start,
        friction,
        list(waypoints),
        terrain,
        road_color,
    )
