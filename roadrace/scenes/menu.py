import pygame
from roadrace.settings import *
from roadrace.models.vehicle import VEHICLES
from roadrace.models.track import track_name, TRACK_COUNT
from roadrace.utils.ui import draw_button, draw_option_box, draw_text_centered

BTN_START = pygame.Rect(60, 560, 240, 55)
BTN_BUY = pygame.Rect(320, 560, 240, 55)
BTN_RESET = pygame.Rect(580, 560, 240, 55)


def track_box(i):
    return pygame.Rect(60 + i * 260, 230, 240, 70)


def vehicle_box(i):
    return pygame.Rect(60 + i * 260, 360, 240, 70)


def difficulty_box(i):
    return pygame.Rect(60 + i * 180, 490, 160, 45)


def menu_hit(pos):
    """Map a click position to a menu action like ("track", 1) or ("start", None)."""
    for i in range(TRACK_COUNT):
        if track_box(i).collidepoint(pos):
            return ("track", i)
    for i in range(len(VEHICLES)):
        if vehicle_box(i).collidepoint(pos):
            return ("vehicle", i)
    for i in range(len(DIFFICULTY_NAMES)):
        if difficulty_box(i).collidepoint(pos):
            return ("difficulty", i)
    if BTN_START.collidepoint(pos):
        return ("start", None)
    if BTN_BUY.collidepoint(pos):
        return ("buy", None)
    if BTN_RESET.collidepoint(pos):
        return ("reset", None)
    return None


def handle_menu_click(session, pos):
    hit = menu_hit(pos)
    if hit is None:
        return False
    action, index = hit
    if action == "track":
        return session.select_track(index)
    if action == "vehicle":
        return session.select_vehicle(index)
    if action == "difficulty":
        return session.select_difficulty(index)
    if action == "start":
        return session.start_race()
    if action == "buy":
        return session.buy_unlock()
    return session.reset_progress()


def draw_menu(screen, state, fonts):
    """Menu screen: selections, prices and the three buttons."""
    font_title, font_main, font_small = fonts
    screen.fill(COLOR_BG)

    screen.blit(font_title.render("2D Racing", True, COLOR_TEXT), (60, 60))
    screen.blit(font_main.render(f"Coins: {state['coins']}", True, COLOR_HIGHLIGHT), (60, 120))

    screen.blit(font_main.render("Choose Track", True, COLOR_TEXT), (60, 195))
    for i in range(TRACK_COUNT):
        draw_option_box(screen, track_box(i), f"Track {i + 1}", track_name(i),
                        i == state["track_id"], state["track_unlocked"][i],
                        state["track_costs"][i], (font_main, font_small))

    screen.blit(font_main.render("Choose Vehicle", True, COLOR_TEXT), (60, 325))
    for i, vs in enumerate(VEHICLES):
        line2 = f"Max {int(vs.max_speed)}  Acc {int(vs.acceleration)}  Handle {int(vs.handling * 100)}"
        draw_option_box(screen, vehicle_box(i), vs.name, line2,
                        i == state["vehicle_id"], state["vehicle_unlocked"][i],
                        state["vehicle_costs"][i], (font_main, font_small))

    screen.blit(font_main.render("Difficulty", True, COLOR_TEXT), (60, 455))
    for i, name in enumerate(DIFFICULTY_NAMES):
        rect = difficulty_box(i)
        selected = i == state["difficulty"]
        pygame.draw.rect(screen, COLOR_PANEL_SELECTED if selected else COLOR_PANEL, rect, border_radius=8)
        draw_text_centered(screen, name, font_small, COLOR_HIGHLIGHT if selected else COLOR_TEXT, rect.center)

    draw_button(screen, BTN_START, "START RACE", font_main)
    draw_button(screen, BTN_BUY, "BUY UNLOCK", font_main)
    draw_button(screen, BTN_RESET, "RESET COINS", font_main)
