import numpy as np

from memory import pull_request
from .base_bandit import BaseBandit


class RandomBandit(BaseBandit):
    """Makes completely random decisions."""

    name = "random"

    def __init__(self, rng: np.random.Generator = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def select_arm(self, memory) -> int:
        return pull_request.by_rank(int(self.rng.integers(memory.size())))

    def duplicate(self) -> "RandomBandit":
        return RandomBandit(rng=self.rng)
