from memory import pull_request
from .base_bandit import BaseBandit


class EpsilonFirst(BaseBandit):
    """
    Budget-limited epsilon-first.

    It first sweeps the arms in index order, pass after pass, until the
    exploration share of the budget is spent, and then always pulls the
    best-ranked arm.
    """

    name = "epsilon-first"

    def __init__(self, initial_budget: float, epsilon: float, cost: float = 1.0):
        """
        Initializes the epsilon-first algorithm.

        Parameters
        ----------
        initial_budget : float
            The entire budget the agent has.
        epsilon : float
            The fraction of the budget devoted to exploration, in [0, 1].
        cost : float
            The cost of one pull. All arms are assumed to cost the same.
        """
        if not 0 <= epsilon <= 1:
            raise ValueError("epsilon must be in [0, 1]")
        if cost <= 0:
            raise ValueError("cost must be positive")

        self.initial_budget = initial_budget
        self.epsilon = epsilon
        self.cost = cost

        self.exploration_budget = initial_budget * epsilon
        self.index = 0

    def select_arm(self, memory) -> int:
        if self.exploration_budget < self.cost:
            # Exploitation phase
            return pull_request.by_rank(memory.size() - 1)

        if self.index >= memory.size():
            # Start a new exploration pass
            self.index = 0

        self.exploration_budget -= self.cost
        request = pull_request.by_index(self.index)
        self.index += 1
        return request

    def duplicate(self) -> "EpsilonFirst":
        return EpsilonFirst(self.initial_budget, self.epsilon, self.cost)

    def requires_initial_budget(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"EpsilonFirst(initial_budget={self.initial_budget}, epsilon={self.epsilon}, cost={self.cost})"
