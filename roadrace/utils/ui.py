import pygame
import math
from roadrace.settings import *


def format_time(ms):
    sec = ms // 1000
    rem = ms % 1000
    mins = sec // 60
    sec = sec % 60
    return f"{mins}:{sec:02d}.{rem:03d}"


def countdown_label(countdown_ms):
    """READY while 4+ seconds remain, then 3..2..1..GO!"""
    secs_left = math.ceil(countdown_ms / 1000.0)
    if secs_left >= 4:
        return "READY"
    if secs_left >= 1:
        return str(secs_left)
    return "GO!"


def draw_text_centered(surface, text, font, color, center):
    surf = font.render(text, True, color)
    surface.blit(surf, surf.get_rect(center=center))


def draw_button(surface, rect, text, font):
    pygame.draw.rect(surface, COLOR_BUTTON, rect, border_radius=8)
    pygame.draw.rect(surface, COLOR_TEXT, rect, 2, border_radius=8)
    draw_text_centered(surface, text, font, COLOR_TEXT, rect.center)


def draw_option_box(surface, rect, line1, line2, selected, unlocked, cost, fonts):
    font_main, font_small = fonts
    bg = COLOR_PANEL_SELECTED if selected else COLOR_PANEL
    pygame.draw.rect(surface, bg, rect, border_radius=8)
    pygame.draw.rect(surface, COLOR_HIGHLIGHT if selected else COLOR_TEXT_DIM, rect, 2, border_radius=8)

    surface.blit(font_main.render(line1, True, COLOR_TEXT), (rect.x + 12, rect.y + 8))
    surface.blit(font_small.render(line2, True, COLOR_TEXT_DIM), (rect.x + 12, rect.y + 38))

    if not unlocked:
        lock = font_small.render(f"LOCKED ({cost} coins)", True, COLOR_LOCKED)
        surface.blit(lock, (rect.right - lock.get_width() - 10, rect.y + 10))


def draw_track(surface, track, finish):
    surface.fill(track["terrain_color"])
    road = track["road"]
    pygame.draw.rect(surface, track["road_color"], road, border_radius=24)

    # Track markings
    inner = road.inflate(-160, -160)
    pygame.draw.rect(surface, (230, 230, 230), inner, 2, border_radius=16)

    # Finish line checker pattern
    size = 10
    for y in range(finish.y, finish.bottom, size):
        for x in range(finish.x, finish.right, size):
            color = (255, 255, 255) if ((x + y) // size) % 2 == 0 else (0, 0, 0)
            pygame.draw.rect(surface, color, (x, y, size, size))


def draw_obstacle(surface, rect):
    pygame.draw.rect(surface, COLOR_OBSTACLE, rect, border_radius=6)
    pygame.draw.rect(surface, COLOR_OBSTACLE_EDGE, rect, 3, border_radius=6)


def draw_boost_pad(surface, rect, used):
    if used:
        return
    pygame.draw.rect(surface, COLOR_BOOST, rect, border_radius=6)
    cx, cy = rect.center
    pygame.draw.polygon(surface, COLOR_TEXT, [(cx - 8, cy - 10), (cx - 8, cy + 10), (cx + 10, cy)])


def draw_car(surface, car, is_player):
    body = pygame.Surface((car["width"], car["height"]), pygame.SRCALPHA)
    body.fill(car["color"])
    # windshield
    pygame.draw.rect(body, (30, 30, 40), (car["width"] - 10, 3, 6, car["height"] - 6))
    pygame.draw.rect(body, (0, 0, 0), body.get_rect(), 1)

    rotated = pygame.transform.rotate(body, -math.degrees(car["angle"]))
    center = (int(car["x"]), int(car["y"]))
    surface.blit(rotated, rotated.get_rect(center=center))

    if car["boosting"]:
        pygame.draw.circle(surface, COLOR_BOOST_GLOW, center, 20, 2)
    if is_player:
        pygame.draw.circle(surface, COLOR_PLAYER_MARKER, (center[0], center[1] - 18), 3)


def draw_hud(surface, state, font):
    line = (f"Track: {state['track_name']}   Vehicle: {state['vehicle_name']}"
            f"   Difficulty: {state['difficulty_name']}   Coins: {state['coins']}")
    surface.blit(font.render(line, True, COLOR_TEXT), (20, 12))

    if state["player"] is not None:
        surface.blit(font.render(f"Time: {format_time(state['race_time_ms'])}", True, COLOR_HIGHLIGHT), (20, 40))
        surface.blit(font.render(f"Speed: {int(state['player']['speed'])}", True, COLOR_TEXT), (220, 40))


def draw_overlay(surface, alpha=140):
    shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    shade.fill((0, 0, 0, alpha))
    surface.blit(shade, (0, 0))
