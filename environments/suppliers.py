import logging
from abc import ABC, abstractmethod

import numpy as np

from memory import AgentMemory

logger = logging.getLogger(__name__)


class Supplier(ABC):
    """
    A supplier that provides services and possibly buys from sub-suppliers.

    Its service time is the distribution's sample re-centred on `mean_time`
    and stretched by `scale * spread`. The scale is shared by the whole tree
    while the spread is fixed per supplier (0 for a noiseless supplier).
    """

    def __init__(self, cost: float, mean_time: float, distribution, scale: float,
                 rng: np.random.Generator = None, spread: float = 1.0):
        self.cost = cost
        self.mean_time = mean_time
        self.distribution = distribution
        self.scale = scale
        self.spread = spread
        self.rng = rng if rng is not None else np.random.default_rng()
        # Ground truth for regret analysis. Agents must not look at it.
        self.is_best_arm = False

    @property
    def children(self):
        return None

    def is_leaf(self) -> bool:
        return self.children is None

    def sample(self) -> float:
        deviation = self.distribution.sample(self.rng) - self.distribution.mean
        return deviation * self.scale * self.spread + self.mean_time

    @abstractmethod
    def supply(self) -> float:
        """Purchase supplies; returns the time required to complete the order."""
        raise NotImplementedError

    def reset(self, distribution, scale: float) -> None:
        self.distribution = distribution
        self.scale = scale

    def __str__(self) -> str:
        return f"{self.mean_time}"


class SimpleSupplier(Supplier):
    """A raw material supplier: a leaf of the supply tree."""

    def supply(self) -> float:
        return self.sample()


class AgentSupplier(Supplier):
    """
    An agent that is also a supplier, so agents can be stacked into a tree.

    When supplying, it spends its budget pulling its children's arms with its
    algorithm and adds its own processing time.
    """

    def __init__(self, algorithm, children: list, cost: float, mean_time: float, distribution,
                 scale: float, budget_multiplier: float, is_root: bool,
                 rng: np.random.Generator = None, spread: float = 1.0):
        """
        Args:
            algorithm (BaseBandit): Selects the next arm to pull.
            children (list): The agent's sub-suppliers, all with the same cost.
            cost (float): Cost to use this supplier.
            mean_time (float): Mean processing time of this agent itself.
            distribution (Distribution): Distribution of the processing time.
            scale (float): Spread applied to the distribution.
            budget_multiplier (float): Pulls bought per unit of cost when supplying.
            is_root (bool): Whether this agent is the root of the tree.
            rng (np.random.Generator): Source of randomness for sampling.
            spread (float): This agent's own multiplier on the scale.
        """
        super().__init__(cost, mean_time, distribution, scale, rng, spread)

        if algorithm.requires_initial_budget() and not is_root:
            raise ValueError(
                f"{type(algorithm).__name__} needs the initial budget and can only run on the root agent."
            )
        if not children:
            raise ValueError("An agent needs at least one child supplier.")

        self.algorithm = algorithm
        self._children = children
        self.budget_multiplier = budget_multiplier
        self.is_root = is_root

        self.memory = AgentMemory(children)
        self.budget = 0.0
        self.total_time_taken = 0.0
        self.total_pulls = 0

    @property
    def children(self):
        return self._children

    def reset(self, distribution, scale: float, algorithm=None) -> None:
        """
        Reset the agent for another trial.

        Args:
            algorithm (BaseBandit, optional): A new algorithm to use. If omitted,
                a fresh duplicate of the current one is used.
        """
        super().reset(distribution, scale)
        if algorithm is not None and algorithm.requires_initial_budget() and not self.is_root:
            raise ValueError(
                f"{type(algorithm).__name__} needs the initial budget and can only run on the root agent."
            )
        self.memory.reset()
        self.budget = 0.0
        self.total_time_taken = 0.0
        self.total_pulls = 0
        self.algorithm = algorithm if algorithm is not None else self.algorithm.duplicate()

    def supply(self) -> float:
        return self.explore(self.cost * self.budget_multiplier) + self.sample()

    def explore(self, budget: float) -> float:
        """
        Spend as much of the budget as possible.

        Returns:
            float: The mean time the pulls made during this call took.
        """
        cost = self._children[0].cost
        self.budget += budget

        total_time_spent = 0.0
        pulls_this_explore = 0

        while self.budget >= cost:
            request = self.algorithm.select_arm(self.memory)
            self.budget -= cost

            total_time_spent += self.memory.pull(request)
            self.total_pulls += 1
            pulls_this_explore += 1

        assert 0.0 <= self.budget < cost

        if pulls_this_explore == 0:
            logger.warning(f"Budget {budget} is below the cost {cost} of a single pull.")
            return 0.0

        mean_time = total_time_spent / pulls_this_explore
        self.total_time_taken += mean_time
        return mean_time
