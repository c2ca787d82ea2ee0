"""
Tests for boost pickups and obstacle collisions.
"""

import pygame
import pytest

from roadrace.models.car import PlayerCar, NPCCar
from roadrace.models.obstacle import Obstacle, BoostPad, FinishLine
from roadrace.models.track import make_track
from roadrace.models.vehicle import VEHICLES, get_vehicle
from roadrace.utils.physics import handle_physics


def setup_cars():
    track = make_track(0)
    player = PlayerCar(500, 350, get_vehicle(0))
    npc = NPCCar(300, 450, VEHICLES[0].copy(), track.waypoints)
    return track, player, npc


def covering(car):
    return pygame.Rect(car.get_rect()).inflate(4, 4)


def test_boost_pad_single_use():
    track, player, npc = setup_cars()
    pad = BoostPad(covering(player))

    handle_physics(player, [npc], [], [pad], track)
    assert pad.used
    assert player.boost_ms == 850

    player.boost_ms = 0
    handle_physics(player, [npc], [], [pad], track)
    assert player.boost_ms == 0


def test_player_gets_shared_pad_first():
    track, player, npc = setup_cars()
    npc.x, npc.y = player.x, player.y
    pad = BoostPad(covering(player))

    handle_physics(player, [npc], [], [pad], track)
    assert player.is_boosting()
    assert not npc.is_boosting()


def test_npc_can_take_pad():
    track, player, npc = setup_cars()
    pad = BoostPad(covering(npc))
    handle_physics(player, [npc], [], [pad], track)
    assert npc.boost_ms == 850
    assert not player.is_boosting()


def test_fast_obstacle_hit_reports_impact_speed():
    track, player, npc = setup_cars()
    player.vx = 300.0
    obstacle = Obstacle(covering(player))

    impact = handle_physics(player, [npc], [obstacle], [], track)

    assert impact == pytest.approx(300.0)
    assert player.x == pytest.approx(490.0)
    assert player.vx == pytest.approx(120.0)


def test_slow_obstacle_hit_only_slows():
    track, player, npc = setup_cars()
    player.vx = 200.0
    obstacle = Obstacle(covering(player))

    assert handle_physics(player, [npc], [obstacle], [], track) is None
    assert player.vx == pytest.approx(80.0)
    assert player.x == pytest.approx(490.0)


def test_threshold_is_strict():
    track, player, npc = setup_cars()
    player.vx = 220.0
    assert handle_physics(player, [], [Obstacle(covering(player))], [], track) is None


def test_npc_obstacle_slows_without_explosion():
    track, player, npc = setup_cars()
    npc.vx = 0.0
    npc.vy = 280.0
    obstacle = Obstacle(covering(npc))

    assert handle_physics(player, [npc], [obstacle], [], track) is None
    assert npc.vy == pytest.approx(280.0 * 0.3)
    assert npc.y == pytest.approx(440.0)


def test_explosion_skips_npc_resolution():
    track, player, npc = setup_cars()
    player.vx = 300.0
    npc.vx = 100.0
    obstacles = [Obstacle(covering(player)), Obstacle(covering(npc))]

    assert handle_physics(player, [npc], obstacles, [], track) is not None
    assert npc.vx == 100.0
    assert npc.x == 300


def test_finish_line_overlap():
    track, player, npc = setup_cars()
    finish = FinishLine(track.finish)
    assert not finish.crossed_by(player)
    player.x, player.y = track.finish.center
    assert finish.crossed_by(player)
