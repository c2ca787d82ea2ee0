import logging
from roadrace.settings import *

logger = logging.getLogger(__name__)


def collect_boosts(cars, boosts):
    """Let each car pick up any unused pad it overlaps."""
    for car in cars:
        for pad in boosts:
            if pad.try_use(car):
                logger.debug(f"{car.stats.name} picked up boost at {tuple(pad.rect.topleft)}")


def hit_obstacles(car, obstacles, track, damping):
    """
    Bump car out of every obstacle it overlaps and slow it down.
    Returns the speed the car had when the first obstacle was hit, or None.
    """
    impact = None
    for obs in obstacles:
        if obs.get_rect().colliderect(car.get_rect()):
            speed = car.speed()
            car.bump_back(track)
            car.vx *= damping
            car.vy *= damping
            if impact is None:
                impact = speed
    return impact


def handle_physics(player, npcs, obstacles, boosts, track):
    """
    Resolve pickups and obstacle hits for one race frame, after every car moved.
    Returns the player's impact speed if the crash should wreck the car,
    otherwise None. A wreck stops the remaining checks for the frame.
    """
    collect_boosts([player] + list(npcs), boosts)

    for obs in obstacles:
        if obs.get_rect().colliderect(player.get_rect()):
            speed = player.speed()
            player.bump_back(track)
            player.vx *= PLAYER_OBSTACLE_DAMPING
            player.vy *= PLAYER_OBSTACLE_DAMPING

            if speed > EXPLOSION_SPEED:
                logger.debug(f"Player hit obstacle at {speed:.1f}")
                return speed

    for npc in npcs:
        impact = hit_obstacles(npc, obstacles, track, NPC_OBSTACLE_DAMPING)
        if impact is not None:
            logger.debug(f"NPC hit obstacle at {impact:.1f}")

    return None
