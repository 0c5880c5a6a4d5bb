from memory import pull_request
from .base_bandit import BaseBandit


class LSplit(BaseBandit):
    """
    Successive elimination that drops (1 - 1/l) of the feasible arms after
    every pass.

    Each pass walks a snapshot of the ranking taken when the pass began,
    starting at the boundary of the now-infeasible (worst) arms. Once at most
    one arm is feasible it only ever pulls the best arm.
    """

    name = "l-split"

    def __init__(self, l_value: float):
        """
        Parameters
        ----------
        l_value : float
            The l of the algorithm, at least 1. With l = 1 every arm but the best
            is eliminated after the first pass.
        """
        if l_value < 1:
            raise ValueError("l_value must be at least 1")
        self.l_value = l_value
        self.threshold = 1 - 1 / l_value

        self.feasible = 1.0
        self.index = 0
        # Taken on the first call
        self.snapshot = None
        self.exploitation_mode = False

    def select_arm(self, memory) -> int:
        if self.exploitation_mode:
            return pull_request.by_rank(memory.size() - 1)

        if self.snapshot is None:
            self.snapshot = memory.ranked_snapshot()
        elif self.index >= len(self.snapshot):
            self.snapshot = memory.ranked_snapshot()
            self.feasible *= self.threshold
            self.index = int(len(self.snapshot) - len(self.snapshot) * self.feasible)

            if self.index >= len(self.snapshot) - 1:
                # One feasible arm or less
                self.exploitation_mode = True
                self.snapshot = None
                return pull_request.by_rank(memory.size() - 1)

        request = pull_request.for_arm(self.snapshot[self.index])
        self.index += 1
        return request

    def duplicate(self) -> "LSplit":
        return LSplit(self.l_value)

    def __repr__(self) -> str:
        return f"LSplit(l_value={self.l_value})"
