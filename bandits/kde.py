import numpy as np

from memory import pull_request
from .base_bandit import BaseBandit


class KDE(BaseBandit):
    """
    Online fractional knapsack-based decreasing epsilon-greedy (fKDE).

    After an initial sweep of `gamma = budget * epsilon / cost` pulls in index
    order, a uniformly random arm is explored with probability
    `min(1, gamma / pulls_so_far)`; otherwise the best arm is pulled.
    """

    name = "KDE"

    def __init__(self, initial_budget: float, epsilon: float, cost: float = 1.0,
                 rng: np.random.Generator = None):
        if not 0 <= epsilon <= 1:
            raise ValueError("epsilon must be in [0, 1]")
        if cost <= 0:
            raise ValueError("cost must be positive")

        self.initial_budget = initial_budget
        self.epsilon = epsilon
        self.cost = cost
        self.rng = rng if rng is not None else np.random.default_rng()
        self.gamma = int(initial_budget * epsilon / cost)

        self.index = 0
        self.pulls = 0

    def exploration_probability(self) -> float:
        if self.pulls == 0:
            return 0.0
        return min(1.0, self.gamma / self.pulls)

    def select_arm(self, memory) -> int:
        if self.pulls >= self.gamma:
            explore = self.rng.random() <= self.exploration_probability()
            self.pulls += 1
            if explore:
                return pull_request.by_rank(int(self.rng.integers(memory.size())))
            return pull_request.by_rank(memory.size() - 1)

        if self.index >= memory.size():
            self.index = 0

        self.pulls += 1
        request = pull_request.by_index(self.index)
        self.index += 1
        return request

    def duplicate(self) -> "KDE":
        return KDE(self.initial_budget, self.epsilon, self.cost, rng=self.rng)

    def requires_initial_budget(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"KDE(initial_budget={self.initial_budget}, epsilon={self.epsilon}, cost={self.cost})"
