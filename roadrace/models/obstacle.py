import pygame


class Obstacle:
    def __init__(self, rect):
        self.rect = pygame.Rect(rect)

    def get_rect(self):
        return self.rect


class BoostPad:
    def __init__(self, rect):
        self.rect = pygame.Rect(rect)
        self.used = False

    def get_rect(self):
        return self.rect

    def try_use(self, car):
        """Hand a boost to car if the pad is unused and under it. One use per race."""
        if self.used or not self.rect.colliderect(car.get_rect()):
            return False
        self.used = True
        car.activate_boost()
        return True


class FinishLine:
    def __init__(self, rect):
        self.rect = pygame.Rect(rect)

    def get_rect(self):
        return self.rect

    def crossed_by(self, car):
        return self.rect.colliderect(car.get_rect())
