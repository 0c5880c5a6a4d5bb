from .lsplit import LSplit


class PEEF(LSplit):
    """
    l-split with l chosen so that the feasible arms shrink to one at about
    the end of the exploration budget:

        l = (eB - 1) / (eB - K)
    """

    name = "PEEF"

    def __init__(self, num_arms: int, initial_budget: float, epsilon: float):
        exploration_budget = epsilon * initial_budget
        if exploration_budget <= num_arms:
            raise ValueError("epsilon * initial_budget must exceed the number of arms")
        super().__init__((exploration_budget - 1) / (exploration_budget - num_arms))
        self.num_arms = num_arms
        self.initial_budget = initial_budget
        self.epsilon = epsilon

    def duplicate(self) -> "PEEF":
        return PEEF(self.num_arms, self.initial_budget, self.epsilon)

    def requires_initial_budget(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"PEEF(num_arms={self.num_arms}, initial_budget={self.initial_budget}, epsilon={self.epsilon})"
