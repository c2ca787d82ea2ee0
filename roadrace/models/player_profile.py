import logging
from roadrace.settings import *

logger = logging.getLogger(__name__)


def reward_for_place(place):
    place = max(1, place)
    return REWARD_BY_PLACE.get(place, REWARD_MIN)


class PlayerProfile:
    """Coins and unlocks. Lives for the whole process, survives race restarts."""

    def __init__(self):
        self.coins = 0
        self.track_costs = list(TRACK_COSTS)
        self.vehicle_costs = list(VEHICLE_COSTS)
        self.reset()

    def reset(self):
        """Zero coins and lock everything except the first track and vehicle."""
        self.coins = 0
        self.track_unlocked = [i == 0 for i in range(len(self.track_costs))]
        self.vehicle_unlocked = [i == 0 for i in range(len(self.vehicle_costs))]

    def can_race(self, track_id, vehicle_id):
        return self.track_unlocked[track_id] and self.vehicle_unlocked[vehicle_id]

    def award(self, place):
        winnings = reward_for_place(place)
        self.coins += winnings
        return winnings

    def buy_track(self, track_id):
        cost = self.track_costs[track_id]
        if not self.track_unlocked[track_id] and self.coins >= cost:
            self.coins -= cost
            self.track_unlocked[track_id] = True
            logger.info(f"Unlocked track {track_id} for {cost} coins")
            return True
        return False

    def buy_vehicle(self, vehicle_id):
        cost = self.vehicle_costs[vehicle_id]
        if not self.vehicle_unlocked[vehicle_id] and self.coins >= cost:
            self.coins -= cost
            self.vehicle_unlocked[vehicle_id] = True
            logger.info(f"Unlocked vehicle {vehicle_id} for {cost} coins")
            return True
        return False

    def buy_unlock(self, track_id, vehicle_id):
        """Unlock the selected track if locked, else the selected vehicle."""
        if not self.track_unlocked[track_id]:
            return self.buy_track(track_id)
        if not self.vehicle_unlocked[vehicle_id]:
            return self.buy_vehicle(vehicle_id)
        return False
