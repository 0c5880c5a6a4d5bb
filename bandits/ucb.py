import numpy as np

from memory import pull_request
from .base_bandit import BaseBandit


class UCB_BV1(BaseBandit):
    """
    Budget-limited UCB index policy (UCB-BV1).

    Reward is taken as the inverse of an arm's mean time. Each arm is pulled
    once at time steps 1..K; afterwards the arm with the highest index

        1 / mean_time + 2 * term / (1 - term),  term = sqrt(ln(t - 1) / pulls)

    is pulled, ties going to the lowest arm index.
    """

    name = "UCB-BV1"

    def __init__(self):
        # Time starts at 1 on the first call
        self.time = 0

    def arm_indexes(self, memory) -> np.ndarray:
        mean_times = np.array([arm.mean_time for arm in memory.by_index], dtype=float)
        pulls = np.array([arm.pulls for arm in memory.by_index], dtype=float)

        # Degenerate terms follow IEEE semantics instead of raising.
        with np.errstate(divide="ignore", invalid="ignore"):
            term = np.sqrt(np.log(self.time - 1) / pulls)
            return 1 / mean_times + (2 * term) / (1 - term)

    def select_arm(self, memory) -> int:
        self.time += 1

        if self.time <= memory.size():
            return pull_request.by_index(self.time - 1)

        return pull_request.by_index(int(np.argmax(self.arm_indexes(memory))))

    def duplicate(self) -> "UCB_BV1":
        return UCB_BV1()
