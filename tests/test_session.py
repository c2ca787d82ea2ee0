"""
Tests for the race state machine: phases, timers, finish, crash and economy.
"""

import random

import pytest

from roadrace.models.obstacle import Obstacle
from roadrace.session import RaceSession, Phase


class FakeClock:
    def __init__(self, now=10000):
        self.now = now

    def __call__(self):
        return self.now


def new_session(seed=7, difficulty=1):
    clock = FakeClock()
    session = RaceSession(rng=random.Random(seed), clock=clock)
    session.select_difficulty(difficulty)
    return session, clock


def run_countdown(session):
    for _ in range(100):
        session.update(0.05)
    assert session.phase == Phase.RACE


def racing_session(**kwargs):
    session, clock = new_session(**kwargs)
    assert session.start_race()
    run_countdown(session)
    session.obstacles = []
    session.boosts = []
    return session, clock


def test_starts_in_menu():
    session, _ = new_session()
    assert session.phase == Phase.MENU
    assert session.player is None
    session.update(0.05)
    assert session.phase == Phase.MENU


@pytest.mark.parametrize("difficulty,obstacles,boosts,npcs", [(0, 6, 5, 2), (3, 16, 3, 5)])
def test_race_start_counts(difficulty, obstacles, boosts, npcs):
    session, _ = new_session(difficulty=difficulty)
    assert session.start_race()
    assert session.phase == Phase.COUNTDOWN
    assert session.countdown_ms == 5000
    assert len(session.obstacles) == obstacles
    assert len(session.boosts) == boosts
    assert len(session.npcs) == npcs


def test_start_rejected_when_selection_locked():
    session, _ = new_session()
    assert session.select_track(1)
    assert not session.start_race()
    assert session.phase == Phase.MENU

    session.select_track(0)
    assert session.select_vehicle(2)
    assert not session.start_race()


def test_start_rejected_outside_menu():
    session, _ = new_session()
    assert session.start_race()
    assert not session.start_race()
    assert not session.select_track(0)


def test_selection_range_checked():
    session, _ = new_session()
    assert not session.select_track(3)
    assert not session.select_vehicle(-1)
    assert not session.select_difficulty(4)
    assert session.selected_difficulty == 1


def test_countdown_to_race_records_start_time():
    session, clock = new_session()
    session.start_race()
    for _ in range(99):
        session.update(0.05)
    assert session.phase == Phase.COUNTDOWN
    assert session.countdown_ms == 50

    clock.now = 12345
    session.update(0.05)
    assert session.phase == Phase.RACE
    assert session.race_start_ms == 12345


def test_long_frame_is_clamped():
    session, _ = new_session()
    session.start_race()
    session.update(10.0)
    assert session.countdown_ms == 4950


def test_movement_locked_during_countdown():
    session, _ = new_session()
    session.start_race()
    start = (session.player.x, session.player.y)
    session.press("up")
    session.press("left")
    for _ in range(20):
        session.update(0.05)
    assert (session.player.x, session.player.y) == start
    assert session.player.speed() == 0.0


def test_press_is_idempotent():
    session, _ = new_session()
    assert session.press("up")
    session.press("up")
    assert session.keys == {"up"}
    assert session.release("up")
    assert session.keys == set()
    assert not session.release("up")
    assert not session.press("jump")


def test_fast_crash_explodes_same_frame():
    session, _ = racing_session()
    track = session.track
    session.obstacles = [Obstacle(track.road)]
    session.player.vx = 300.0

    session.update(0.016)

    assert session.phase == Phase.EXPLODE
    assert session.explode_ms == 1100
    assert session.last_impact_speed == pytest.approx(300.0 * track.friction)


def test_explosion_rebuilds_and_counts_down_again():
    session, _ = racing_session()
    session.profile.coins = 55
    session.obstacles = [Obstacle(session.track.road)]
    session.player.vx = 300.0
    session.update(0.016)
    old_player = session.player

    for _ in range(21):
        session.update(0.05)
    assert session.phase == Phase.EXPLODE
    session.update(0.05)

    assert session.phase == Phase.COUNTDOWN
    assert session.countdown_ms == 5000
    assert session.player is not old_player
    assert len(session.obstacles) == 9
    assert session.profile.coins == 55


def test_finish_goes_to_results_once():
    session, clock = racing_session()
    track = session.track
    session.npcs[0].waypoint_index = 5
    session.player.x, session.player.y = track.finish.center

    clock.now = 25000
    session.update(0.016)

    assert session.phase == Phase.RESULTS
    assert session.player_finished
    # Player is nearest waypoint 2, one NPC is past that
    assert session.player.progress_index == 2
    assert session.player_place == 2
    assert session.profile.coins == 40
    assert session.race_start_ms == 10000
    assert session.race_time_ms() == 15000

    clock.now = 30000
    for _ in range(10):
        session.update(0.016)
    assert session.phase == Phase.RESULTS
    assert session.profile.coins == 40
    assert session.race_end_ms == 25000


def test_place_first_when_no_npc_ahead():
    session, _ = racing_session()
    session.player.x, session.player.y = session.track.finish.center
    session.update(0.016)
    assert session.player_place == 1
    assert session.profile.coins == 60


def test_restart_during_race_keeps_counts_and_coins():
    session, _ = racing_session(difficulty=0)
    session.profile.coins = 30
    assert session.restart()
    assert session.phase == Phase.COUNTDOWN
    assert session.countdown_ms == 5000
    assert len(session.obstacles) == 6
    assert len(session.boosts) == 5
    assert len(session.npcs) == 2
    assert session.profile.coins == 30


def test_restart_rejected_in_menu_and_countdown():
    session, _ = new_session()
    assert not session.restart()
    session.start_race()
    assert not session.restart()


def test_results_restart_and_menu():
    session, _ = racing_session()
    session.player.x, session.player.y = session.track.finish.center
    session.update(0.016)
    assert session.phase == Phase.RESULTS

    assert session.restart()
    assert session.phase == Phase.COUNTDOWN
    assert not session.player_finished

    assert session.return_to_menu()
    assert session.phase == Phase.MENU
    assert not session.return_to_menu()


def test_buy_unlock_and_race_new_track():
    session, _ = new_session()
    session.select_track(1)
    assert not session.buy_unlock()

    session.profile.coins = 100
    assert session.buy_unlock()
    assert session.profile.coins == 20
    assert session.profile.track_unlocked[1]
    assert session.start_race()
    assert session.track.name == "Desert Loop"


def test_buy_unlock_rejected_outside_menu():
    session, _ = new_session()
    session.profile.coins = 500
    session.start_race()
    assert not session.buy_unlock()
    assert session.profile.coins == 500


def test_reset_progress():
    session, _ = new_session()
    session.profile.coins = 300
    session.select_vehicle(1)
    session.buy_unlock()
    assert session.reset_progress()
    assert session.profile.coins == 0
    assert session.profile.vehicle_unlocked == [True, False, False]
    assert session.profile.track_unlocked == [True, False, False]


def test_render_state_is_a_copy():
    session, _ = new_session()
    state = session.render_state()
    assert state["phase"] == Phase.MENU
    assert state["player"] is None

    session.start_race()
    state = session.render_state()
    state["obstacles"][0].x += 500
    state["track"]["road"].width = 1
    state["track_unlocked"][1] = True
    assert session.obstacles[0].rect.x != state["obstacles"][0].x
    assert session.track.road.width != 1
    assert not session.profile.track_unlocked[1]
    assert len(state["npcs"]) == 3


@pytest.mark.parametrize("difficulty", range(4))
def test_speed_and_bounds_hold_every_frame(difficulty):
    session, _ = new_session(seed=difficulty, difficulty=difficulty)
    session.start_race()
    run_countdown(session)
    rng = random.Random(99)

    for frame in range(900):
        if frame % 30 == 0:
            for direction in ("up", "down", "left", "right"):
                session.release(direction)
            session.press("up")
            session.press(rng.choice(["left", "right", "up"]))
        session.update(rng.uniform(0.005, 0.08))
        if session.phase == Phase.RESULTS:
            session.restart()
        if session.track is None:
            continue

        road = session.track.road
        for car in [session.player] + session.npcs:
            assert car.speed() <= car.effective_max_speed() + 1e-6
            assert road.x + car.width / 2.0 - 1e-9 <= car.x <= road.right - car.width / 2.0 + 1e-9
            assert road.y + car.height / 2.0 - 1e-9 <= car.y <= road.bottom - car.height / 2.0 + 1e-9
