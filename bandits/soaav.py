import logging

from memory import pull_request
from .base_bandit import BaseBandit

logger = logging.getLogger(__name__)


class SOAAV(BaseBandit):
    """
    Successive elimination against the average of the feasible arms.

    At the start of every pass the threshold becomes `average * (1 + x)`,
    where average is the mean of the mean times of the arms that were
    feasible in the previous pass. Arms slower than the threshold become
    infeasible. Once at most one arm is feasible it only exploits.
    """

    name = "SOAAV"

    def __init__(self, x: float = 0.0):
        self.x = x
        self.threshold_multiplier = 1 + x
        self.threshold = None

        self.position = 0
        # First feasible rank of the previous pass
        self.last_start = 0
        self.snapshot = None
        self.exploitation_mode = False

    def select_arm(self, memory) -> int:
        if self.exploitation_mode:
            return pull_request.by_rank(memory.size() - 1)

        if self.snapshot is None:
            self.snapshot = memory.ranked_snapshot()
        elif self.position >= len(self.snapshot):
            self.snapshot = memory.ranked_snapshot()
            self.threshold = memory.average_from(self.last_start) * self.threshold_multiplier

            self.position = 0
            while self.position < len(self.snapshot) and self.snapshot[self.position].mean_time > self.threshold:
                self.position += 1
            self.last_start = self.position
            logger.debug(f"SOAAV threshold {self.threshold:.4f}, first feasible rank {self.position}")

            if self.position >= len(self.snapshot) - 1:
                self.exploitation_mode = True
                self.snapshot = None
                return pull_request.by_rank(memory.size() - 1)

        request = pull_request.for_arm(self.snapshot[self.position])
        self.position += 1
        return request

    def duplicate(self) -> "SOAAV":
        return SOAAV(self.x)

    def __repr__(self) -> str:
        return f"SOAAV(x={self.x})"
