import logging
import random
import time
from enum import Enum

from roadrace.settings import *
from roadrace.models.car import PlayerCar, NPCCar, clamp_dt, elapsed_ms
from roadrace.models.obstacle import FinishLine
from roadrace.models.player_profile import PlayerProfile
from roadrace.models.track import make_track, track_name, TRACK_COUNT
from roadrace.models.vehicle import VEHICLES, get_vehicle
from roadrace.utils.layout import build_layout
from roadrace.utils.physics import handle_physics

logger = logging.getLogger(__name__)


class Phase(Enum):
    MENU = "menu"
    COUNTDOWN = "countdown"
    RACE = "race"
    EXPLODE = "explode"
    RESULTS = "results"


IN_RACE_PHASES = (Phase.COUNTDOWN, Phase.RACE, Phase.EXPLODE, Phase.RESULTS)


def wall_clock_ms():
    return int(time.time() * 1000)


class RaceSession:
    """
    Race state machine: MENU -> COUNTDOWN -> RACE -> EXPLODE/RESULTS.

    update(dt) advances the current phase. The action methods (start_race,
    restart, ...) return True when they did something and False when the
    current phase or the selection does not allow it.
    """

    def __init__(self, profile=None, rng=None, clock=wall_clock_ms):
        self.profile = profile if profile is not None else PlayerProfile()
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock

        self.phase = Phase.MENU
        self.keys = set()

        # Selection
        self.selected_track = 0
        self.selected_vehicle = 0
        self.selected_difficulty = DEFAULT_DIFFICULTY

        # World objects
        self.track = None
        self.player = None
        self.npcs = []
        self.obstacles = []
        self.boosts = []
        self.finish_line = None

        # Timers
        self.countdown_ms = COUNTDOWN_MS
        self.explode_ms = 0

        # Race results
        self.race_start_ms = 0
        self.race_end_ms = 0
        self.player_finished = False
        self.player_place = 0
        self.last_reward = 0
        self.last_impact_speed = 0.0

        self._handlers = {
            Phase.MENU: self._update_idle,
            Phase.COUNTDOWN: self._update_countdown,
            Phase.RACE: self._update_race,
            Phase.EXPLODE: self._update_explode,
            Phase.RESULTS: self._update_idle,
        }

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------
    def update(self, dt):
        self._handlers[self.phase](clamp_dt(dt))

    def _set_phase(self, phase):
        if phase != self.phase:
            logger.info(f"{self.phase.name} -> {phase.name}")
        self.phase = phase

    def _update_idle(self, dt):
        # no physics
        pass

    def _update_countdown(self, dt):
        # Keys are still collected but nothing moves
        self.countdown_ms -= elapsed_ms(dt)
        if self.countdown_ms <= 0:
            self.race_start_ms = self.clock()
            self._set_phase(Phase.RACE)

    def _update_race(self, dt):
        if self.track is None:
            return

        self.player.update(dt, self.track, self.keys)
        for npc in self.npcs:
            npc.update(dt, self.track)

        impact = handle_physics(self.player, self.npcs, self.obstacles, self.boosts, self.track)
        if impact is not None:
            self.last_impact_speed = impact
            self._start_explosion()
            return

        if not self.player_finished and self.finish_line.crossed_by(self.player):
            self._finish_race()

    def _update_explode(self, dt):
        self.explode_ms -= elapsed_ms(dt)
        if self.explode_ms <= 0:
            # Restart from the grid, coins and unlocks untouched
            self._build_race()
            self._enter_countdown()

    def _start_explosion(self):
        logger.info(f"Player wrecked at {self.last_impact_speed:.1f}")
        self.explode_ms = EXPLODE_MS
        self._set_phase(Phase.EXPLODE)

    def _finish_race(self):
        self.player_finished = True
        self.race_end_ms = self.clock()
        self.player_place = self.compute_place()
        self.last_reward = self.profile.award(self.player_place)
        logger.info(f"Finished {self.race_time_ms()} ms, place {self.player_place}, +{self.last_reward} coins")
        self._set_phase(Phase.RESULTS)

    def compute_place(self):
        # Rough rank: NPCs further round the waypoint loop count as ahead
        better = 0
        for npc in self.npcs:
            if npc.waypoint_index > self.player.progress_index:
                better += 1
        return better + 1

    def race_time_ms(self):
        if self.phase in (Phase.MENU, Phase.COUNTDOWN) or self.race_start_ms == 0:
            return 0
        if self.player_finished:
            return self.race_end_ms - self.race_start_ms
        return self.clock() - self.race_start_ms

    # ------------------------------------------------------------------
    # Setup / reset
    # ------------------------------------------------------------------
    def _build_race(self):
        self.track = make_track(self.selected_track)

        stats = get_vehicle(self.selected_vehicle)
        self.player = PlayerCar(self.track.start_x, self.track.start_y, stats)
        self.player.clamp_to_road(self.track, damp=False)

        self.finish_line = FinishLine(self.track.finish)
        self.obstacles, self.boosts = build_layout(self.track, self.selected_difficulty, self.rng)
        self.npcs = self._create_npcs()

        self.player_finished = False
        self.player_place = 0
        self.last_reward = 0
        self.race_start_ms = 0
        self.race_end_ms = 0

    def _create_npcs(self):
        npc_count = NPC_COUNTS[self.selected_difficulty]
        scale = NPC_SPEED_SCALE[self.selected_difficulty]

        npcs = []
        for i in range(npc_count):
            npc_stats = VEHICLES[0].scaled(scale)
            # Spawn slightly behind/side of the player
            sx = self.track.start_x - NPC_SPAWN_DX - i * NPC_SPAWN_STEP_X
            sy = self.track.start_y + NPC_SPAWN_DY + i * NPC_SPAWN_STEP_Y
            npc = NPCCar(sx, sy, npc_stats, self.track.waypoints)
            npc.clamp_to_road(self.track, damp=False)
            npcs.append(npc)
        return npcs

    def _enter_countdown(self):
        self.countdown_ms = COUNTDOWN_MS
        self._set_phase(Phase.COUNTDOWN)

    # ------------------------------------------------------------------
    # Input actions
    # ------------------------------------------------------------------
    def press(self, direction):
        if direction not in DIRECTIONS:
            return False
        self.keys.add(direction)
        return True

    def release(self, direction):
        if direction not in self.keys:
            return False
        self.keys.discard(direction)
        return True

    def select_track(self, track_id):
        if self.phase != Phase.MENU or not 0 <= track_id < TRACK_COUNT:
            return False
        self.selected_track = track_id
        return True

    def select_vehicle(self, vehicle_id):
        if self.phase != Phase.MENU or not 0 <= vehicle_id < len(VEHICLES):
            return False
        self.selected_vehicle = vehicle_id
        return True

    def select_difficulty(self, difficulty):
        if self.phase != Phase.MENU or not 0 <= difficulty < len(DIFFICULTY_NAMES):
            return False
        self.selected_difficulty = difficulty
        return True

    def start_race(self):
        if self.phase != Phase.MENU:
            return False
        if not self.profile.can_race(self.selected_track, self.selected_vehicle):
            logger.debug("Start rejected: selection locked")
            return False
        self._build_race()
        self._enter_countdown()
        logger.info(f"Race on {self.track.name} with {self.player.stats.name}, "
                    f"{DIFFICULTY_NAMES[self.selected_difficulty]}")
        return True

    def restart(self):
        if self.phase == Phase.RACE:
            self._build_race()
            self._enter_countdown()
            return True
        if self.phase == Phase.RESULTS:
            # Race again with the same settings
            self._set_phase(Phase.MENU)
            return self.start_race()
        logger.debug(f"Restart ignored in {self.phase.name}")
        return False

    def return_to_menu(self):
        if self.phase not in IN_RACE_PHASES:
            return False
        self._set_phase(Phase.MENU)
        return True

    def buy_unlock(self):
        if self.phase != Phase.MENU:
            return False
        bought = self.profile.buy_unlock(self.selected_track, self.selected_vehicle)
        if not bought:
            logger.debug(f"Unlock rejected with {self.profile.coins} coins")
        return bought

    def reset_progress(self):
        if self.phase != Phase.MENU:
            return False
        self.profile.reset()
        logger.info("Progress reset")
        return True

    # ------------------------------------------------------------------
    # Render boundary
    # ------------------------------------------------------------------
    def render_state(self):
        """Snapshot of everything a renderer needs. Copies only."""
        state = {
            "phase": self.phase,
            "countdown_ms": self.countdown_ms,
            "explode_ms": self.explode_ms,
            "race_time_ms": self.race_time_ms(),
            "coins": self.profile.coins,
            "track_id": self.selected_track,
            "vehicle_id": self.selected_vehicle,
            "difficulty": self.selected_difficulty,
            "track_name": track_name(self.selected_track),
            "vehicle_name": VEHICLES[self.selected_vehicle].name,
            "difficulty_name": DIFFICULTY_NAMES[self.selected_difficulty],
            "track_unlocked": list(self.profile.track_unlocked),
            "vehicle_unlocked": list(self.profile.vehicle_unlocked),
            "track_costs": list(self.profile.track_costs),
            "vehicle_costs": list(self.profile.vehicle_costs),
            "place": self.player_place,
            "reward": self.last_reward,
            "impact_speed": self.last_impact_speed,
            "track": None,
            "player": None,
            "npcs": [],
            "obstacles": [],
            "boosts": [],
            "finish": None,
        }
        if self.track is None:
            return state

        state["track"] = {
            "road": self.track.road.copy(),
            "terrain_color": self.track.terrain_color,
            "road_color": self.track.road_color,
        }
        state["player"] = _car_state(self.player)
        state["npcs"] = [_car_state(npc) for npc in self.npcs]
        state["obstacles"] = [obs.get_rect().copy() for obs in self.obstacles]
        state["boosts"] = [(pad.get_rect().copy(), pad.used) for pad in self.boosts]
        state["finish"] = self.finish_line.get_rect().copy()
        return state


def _car_state(car):
    return {
        "x": car.x,
        "y": car.y,
        "rect": car.get_rect(),
        "angle": car.angle,
        "speed": car.speed(),
        "boosting": car.is_boosting(),
        "color": car.stats.color,
        "width": car.width,
        "height": car.height,
    }
