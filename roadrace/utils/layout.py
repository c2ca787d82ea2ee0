import logging
import math
import pygame
from roadrace.settings import *
from roadrace.models.obstacle import Obstacle, BoostPad

logger = logging.getLogger(__name__)


def fallback_rect(track, w, h):
    road = track.road
    return pygame.Rect(road.x + FALLBACK_OFFSET, road.y + FALLBACK_OFFSET, w, h)


def random_rect_on_road(rng, track, w, h, min_from_start=MIN_DIST_FROM_START,
                        avoid=(), attempts=PLACEMENT_ATTEMPTS):
    """
    Pick a w x h rectangle fully on the road, away from the start and clear of
    the finish line and of the rects in avoid. Falls back to a fixed spot
    once the attempt budget runs out.
    """
    road = track.road
    for _ in range(attempts):
        x = road.x + rng.randrange(max(1, road.width - w))
        y = road.y + rng.randrange(max(1, road.height - h))
        candidate = pygame.Rect(x, y, w, h)

        if not road.contains(candidate):
            continue

        # Keep away from start area
        if math.hypot(x - track.start_x, y - track.start_y) < min_from_start:
            continue

        if track.finish.colliderect(candidate):
            continue

        if candidate.collidelist(avoid) != -1:
            continue

        return candidate

    logger.warning(f"No free spot for {w}x{h} item on {track.name} after {attempts} tries, using fallback")
    return fallback_rect(track, w, h)


def build_layout(track, difficulty, rng):
    """Scatter obstacles and boost pads for a race. Returns (obstacles, boosts)."""
    obs_count = OBSTACLE_COUNTS[difficulty]
    boost_count = BOOST_COUNTS[difficulty]

    placed = []
    obstacles = []
    for _ in range(obs_count):
        rect = random_rect_on_road(rng, track, OBSTACLE_SIZE, OBSTACLE_SIZE, avoid=placed)
        placed.append(rect)
        obstacles.append(Obstacle(rect))

    boosts = []
    for _ in range(boost_count):
        rect = random_rect_on_road(rng, track, BOOST_PAD_SIZE, BOOST_PAD_SIZE, avoid=placed)
        placed.append(rect)
        boosts.append(BoostPad(rect))

    logger.debug(f"Layout for {track.name}: {len(obstacles)} obstacles, {len(boosts)} boost pads")
    return obstacles, boosts
