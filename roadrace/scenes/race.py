import pygame
from roadrace.settings import *
from roadrace.session import Phase
from roadrace.utils.ui import (countdown_label, draw_boost_pad, draw_car, draw_hud, draw_obstacle,
                               draw_overlay, draw_text_centered, draw_track, format_time)

KEY_DIRECTIONS = {
    pygame.K_w: "up",
    pygame.K_UP: "up",
    pygame.K_s: "down",
    pygame.K_DOWN: "down",
    pygame.K_a: "left",
    pygame.K_LEFT: "left",
    pygame.K_d: "right",
    pygame.K_RIGHT: "right",
}


def handle_race_key(session, key, pressed):
    """Route a key event to the session. Returns True if it changed anything."""
    direction = KEY_DIRECTIONS.get(key)
    if direction is not None:
        return session.press(direction) if pressed else session.release(direction)
    if not pressed:
        return False

    if session.phase == Phase.RESULTS:
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            return session.return_to_menu()
        if key == pygame.K_r:
            return session.restart()
    elif key == pygame.K_ESCAPE:
        return session.return_to_menu()
    elif key == pygame.K_r:
        return session.restart()
    return False


def draw_race(screen, state, fonts):
    """World, HUD and the overlay for the current phase."""
    font_title, font_main, font_small = fonts

    draw_track(screen, state["track"], state["finish"])
    for rect, used in state["boosts"]:
        draw_boost_pad(screen, rect, used)
    for rect in state["obstacles"]:
        draw_obstacle(screen, rect)
    for npc in state["npcs"]:
        draw_car(screen, npc, False)
    draw_car(screen, state["player"], True)

    draw_hud(screen, state, font_small)

    center = (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
    phase = state["phase"]
    if phase == Phase.COUNTDOWN:
        draw_overlay(screen, 90)
        draw_text_centered(screen, countdown_label(state["countdown_ms"]), font_title, COLOR_HIGHLIGHT, center)
        draw_text_centered(screen, "Movement locked during countdown", font_small, COLOR_TEXT,
                           (center[0], center[1] + 70))
    elif phase == Phase.EXPLODE:
        draw_explosion(screen, state, fonts)
    elif phase == Phase.RESULTS:
        draw_overlay(screen)
        draw_text_centered(screen, "RESULTS", font_title, COLOR_TEXT, (center[0], center[1] - 90))
        draw_text_centered(screen, f"Place: {state['place']}   +{state['reward']} coins", font_main,
                           COLOR_HIGHLIGHT, (center[0], center[1] - 20))
        draw_text_centered(screen, f"Time: {format_time(state['race_time_ms'])}", font_main, COLOR_TEXT,
                           (center[0], center[1] + 20))
        draw_text_centered(screen, "Press ENTER to return to Menu, or R to race again.", font_small,
                           COLOR_TEXT_DIM, (center[0], center[1] + 80))


def draw_explosion(screen, state, fonts):
    font_title, font_main, font_small = fonts
    draw_overlay(screen, 70)

    # Expanding blast centered on the player
    p = 1.0 - state["explode_ms"] / float(EXPLODE_MS)
    p = max(0.0, min(1.0, p))
    cx, cy = int(state["player"]["x"]), int(state["player"]["y"])
    radius = int(20 + p * 140)
    pygame.draw.circle(screen, (255, 140, 0), (cx, cy), radius)
    pygame.draw.circle(screen, (255, 230, 120), (cx, cy), int(radius * 0.65))

    draw_text_centered(screen, "CRASH! Restarting...", font_title, COLOR_TEXT,
                       (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 - 40))
    draw_text_centered(screen, f"Impact speed: {int(state['impact_speed'])}", font_main, COLOR_TEXT,
                       (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + 20))
