import logging
import time
import pygame
from roadrace.settings import *
from roadrace.session import RaceSession, Phase
from roadrace.scenes.menu import draw_menu, handle_menu_click
from roadrace.scenes.race import draw_race, handle_race_key


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption(f"2D Racing v{VERSION}")
    clock = pygame.time.Clock()

    fonts = (
        pygame.font.Font(None, 72),
        pygame.font.Font(None, 32),
        pygame.font.Font(None, 24),
    )

    session = RaceSession()
    last_time = time.perf_counter()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                handle_race_key(session, event.key, True)
            elif event.type == pygame.KEYUP:
                handle_race_key(session, event.key, False)
            elif event.type == pygame.MOUSEBUTTONDOWN and session.phase == Phase.MENU:
                handle_menu_click(session, event.pos)

        now = time.perf_counter()
        dt = min(now - last_time, MAX_DT)
        last_time = now

        session.update(dt)

        state = session.render_state()
        if state["phase"] == Phase.MENU:
            draw_menu(screen, state, fonts)
        else:
            draw_race(screen, state, fonts)

        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
