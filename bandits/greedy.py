from memory import pull_request
from .base_bandit import BaseBandit


class Greedy(BaseBandit):
    """
    Online greedy: pull every arm once in index order, then always pull the
    best-ranked arm.
    """

    name = "greedy"

    def __init__(self):
        # Next arm of the exploration pass
        self.index = 0

    def select_arm(self, memory) -> int:
        if self.index >= memory.size():
            return pull_request.by_rank(memory.size() - 1)

        request = pull_request.by_index(self.index)
        self.index += 1
        return request

    def duplicate(self) -> "Greedy":
        return Greedy()
