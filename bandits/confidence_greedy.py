import logging
from enum import Enum

import numpy as np

from memory import pull_request
from .base_bandit import BaseBandit

logger = logging.getLogger(__name__)

# Probabilities at or above this are treated as 1 (floating point rounding).
ALMOST_ONE = 0.996


class Reason(Enum):
    INITIAL_EXPLORE = "Initial exploration pass"
    INITIAL_GREEDY = "Initial greedy data gathering"
    EXPLORE = "Explore likely usurper"
    EXPLOIT = "Exploit best arm"


class ConfidenceBiasedGreedy(BaseBandit):
    """
    Greedy that explores in proportion to how likely the best arm is not the best.

    1. Pull each arm once, in index order, with sample tracking enabled.
    2. Pull the current best arm until it has `initial_exploration_size` samples.
    3. Afterwards, compute each arm's dominance probability against the best
       arm. Probabilities below ALMOST_ONE are summed into an exploration
       probability; with that probability the arm with the highest dominance
       probability is explored, otherwise the best arm is exploited.
    """

    name = "greedy+"

    def __init__(self, initial_exploration_size: int, rng: np.random.Generator = None):
        """
        Parameters
        ----------
        initial_exploration_size : int
            Number of samples the best arm needs before its distribution is
            trusted for comparisons.
        rng : np.random.Generator, optional
            Source of randomness for the explore/exploit draw.
        """
        self.initial_exploration_size = initial_exploration_size
        self.rng = rng if rng is not None else np.random.default_rng()

        self.initialized = False
        self.initial_explore = True
        self.current_arm_index = 0

    def select_arm(self, memory) -> int:
        if not self.initialized:
            memory.enable_sample_tracking()
            self.initialized = True

        if self.initial_explore:
            request = pull_request.by_index(self.current_arm_index)
            self.current_arm_index += 1
            if self.current_arm_index >= memory.size():
                self.initial_explore = False
            return self._trace(memory, request, Reason.INITIAL_EXPLORE)

        best_rank = memory.size() - 1
        if memory.best.pulls < self.initial_exploration_size:
            return self._trace(memory, pull_request.by_rank(best_rank), Reason.INITIAL_GREEDY)

        usurper, explore_probability = self.likely_usurper(memory)
        if self.rng.random() < explore_probability:
            return self._trace(memory, pull_request.for_arm(usurper), Reason.EXPLORE)
        return self._trace(memory, pull_request.by_rank(best_rank), Reason.EXPLOIT)

    @staticmethod
    def likely_usurper(memory):
        """
        Find the arm most likely to usurp the current best.

        Returns
        -------
        tuple
            (arm with the highest dominance probability below ALMOST_ONE, or
            None; sum of those probabilities). Ties go to the lowest index.
        """
        best = memory.best
        usurper = None
        usurper_probability = -1.0
        explore_probability = 0.0

        for arm in memory.by_index:
            probability = arm.dominance_probability(best)
            # A (near) certain match is the best distribution itself.
            if probability < ALMOST_ONE:
                if probability > usurper_probability:
                    usurper = arm
                    usurper_probability = probability
                explore_probability += probability

        return usurper, explore_probability

    def _trace(self, memory, request: int, reason: Reason) -> int:
        if logger.isEnabledFor(logging.DEBUG):
            best = memory.best
            observed = ", ".join(f"{arm.mean_time:6.3f}" for arm in memory.by_index)
            chances = ", ".join(f"{100 * arm.dominance_probability(best):5.1f}%" for arm in memory.by_index)
            logger.debug(f"{reason.value}: {memory.get_index(request)}")
            logger.debug(f"observed {{{observed}}}")
            logger.debug(f"usurper chance {{{chances}}}")
        return request

    def duplicate(self) -> "ConfidenceBiasedGreedy":
        return ConfidenceBiasedGreedy(self.initial_exploration_size, rng=self.rng)

    def __repr__(self) -> str:
        return f"ConfidenceBiasedGreedy(initial_exploration_size={self.initial_exploration_size})"
