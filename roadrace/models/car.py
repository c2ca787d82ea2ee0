import math
import pygame
from roadrace.settings import *


def clamp_dt(dt):
    """Frame delta in seconds, clamped so a stalled frame can't blow up the physics."""
    return max(0.0, min(dt, MAX_DT))


def elapsed_ms(dt):
    return int(round(dt * 1000))


def normalize_angle(a):
    """Wrap an angle into (-pi, pi]."""
    while a > math.pi:
        a -= math.pi * 2
    while a <= -math.pi:
        a += math.pi * 2
    return a


def nearest_waypoint(waypoints, x, y):
    """Index of the closest waypoint; ties go to the first one."""
    best = float('inf')
    idx = 0
    for i, (wx, wy) in enumerate(waypoints):
        d = (wx - x) * (wx - x) + (wy - y) * (wy - y)
        if d < best:
            best = d
            idx = i
    return idx


class Car:
    # Max speed multiplier while a boost is running
    boost_multiplier = 1.0

    def __init__(self, x, y, stats, angle=0.0):
        # Position is the center of the car
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.angle = angle
        self.stats = stats
        self.width = CAR_WIDTH
        self.height = CAR_HEIGHT

        # Boost
        self.boost_ms = 0

        # Progress along the waypoint loop (used for ranking)
        self.waypoint_index = 0

    def get_rect(self):
        return pygame.Rect(int(self.x - self.width // 2), int(self.y - self.height // 2), self.width, self.height)

    def speed(self):
        return math.hypot(self.vx, self.vy)

    def is_boosting(self):
        return self.boost_ms > 0

    def effective_max_speed(self):
        max_s = self.stats.max_speed
        if self.is_boosting():
            max_s *= self.boost_multiplier
        return max_s

    def activate_boost(self):
        self.boost_ms = BOOST_DURATION_MS

    def tick_boost(self, dt):
        if self.boost_ms > 0:
            self.boost_ms = max(0, self.boost_ms - elapsed_ms(dt))

    def clamp_speed(self):
        max_s = self.effective_max_speed()
        s = self.speed()
        if s > max_s:
            scale = max_s / s
            self.vx *= scale
            self.vy *= scale

    def apply_friction(self, track):
        # Terrain friction bleeds speed off exponentially
        self.vx *= track.friction
        self.vy *= track.friction

    def clamp_to_road(self, track, damp=True):
        """Keep the bounding box inside the road. Returns True if a wall was hit."""
        r = track.road
        left = r.x + self.width / 2.0
        right = r.x + r.width - self.width / 2.0
        top = r.y + self.height / 2.0
        bottom = r.y + r.height - self.height / 2.0

        hit_x = False
        hit_y = False
        if self.x <= left:
            self.x = left
            hit_x = True
        elif self.x >= right:
            self.x = right
            hit_x = True
        if self.y <= top:
            self.y = top
            hit_y = True
        elif self.y >= bottom:
            self.y = bottom
            hit_y = True

        if damp:
            if hit_x:
                self.vx *= WALL_DAMPING
            if hit_y:
                self.vy *= WALL_DAMPING
        return hit_x or hit_y

    def bump_back(self, track=None):
        """Step back along the reverse of travel; a fixed correction, not motion."""
        s = self.speed()
        if s > 0:
            nx = -self.vx / s
            ny = -self.vy / s
        else:
            nx, ny = -1.0, 0.0
        self.x += nx * BUMP_DISTANCE
        self.y += ny * BUMP_DISTANCE
        if track is not None:
            self.clamp_to_road(track, damp=False)

    def _integrate(self, dt, track, thrust):
        """One kinematics step. thrust scales acceleration along the heading."""
        self.tick_boost(dt)

        if thrust:
            self.vx += math.cos(self.angle) * self.stats.acceleration * thrust * dt
            self.vy += math.sin(self.angle) * self.stats.acceleration * thrust * dt

        self.clamp_speed()

        self.x += self.vx * dt
        self.y += self.vy * dt

        self.apply_friction(track)
        self.clamp_to_road(track)

    def update(self, dt, track):
        raise NotImplementedError


class PlayerCar(Car):
    boost_multiplier = PLAYER_BOOST_MULTIPLIER

    def __init__(self, x, y, stats):
        super().__init__(x, y, stats, angle=PLAYER_START_ANGLE)
        # Nearest waypoint, used for a simple place calculation
        self.progress_index = 0

    def turn_rate(self):
        # More speed => more turn responsiveness
        speed_factor = PLAYER_TURN_BASE + min(self.speed() / PLAYER_TURN_SPEED_REF, 1.0)
        return self.stats.handling * speed_factor * PLAYER_TURN_GAIN

    def update(self, dt, track, keys=()):
        dt = clamp_dt(dt)

        turn = self.turn_rate()
        if "left" in keys:
            self.angle -= turn * dt
        if "right" in keys:
            self.angle += turn * dt

        thrust = 0.0
        if "up" in keys:
            thrust += 1.0
        if "down" in keys:
            thrust -= PLAYER_REVERSE_FACTOR

        self._integrate(dt, track, thrust)
        self.progress_index = nearest_waypoint(track.waypoints, self.x, self.y)


class NPCCar(Car):
    boost_multiplier = NPC_BOOST_MULTIPLIER

    def __init__(self, x, y, stats, waypoints):
        # Own copy so the tint never leaks into the template
        stats = stats.copy()
        stats.color = tuple(max(0, c - NPC_COLOR_SHADE) for c in stats.color)
        super().__init__(x, y, stats)
        self.waypoints = waypoints

    def current_target(self):
        return self.waypoints[self.waypoint_index % len(self.waypoints)]

    def update(self, dt, track):
        if not self.waypoints:
            return
        dt = clamp_dt(dt)

        # Seek current waypoint, moving on once inside the arrival radius
        tx, ty = self.current_target()
        if math.hypot(tx - self.x, ty - self.y) < NPC_ARRIVAL_RADIUS:
            self.waypoint_index += 1
            tx, ty = self.current_target()

        desired = math.atan2(ty - self.y, tx - self.x)
        diff = normalize_angle(desired - self.angle)

        max_turn = self.stats.handling * NPC_TURN_GAIN * dt
        self.angle += max(-max_turn, min(max_turn, diff))

        self._integrate(dt, track, NPC_THROTTLE)
