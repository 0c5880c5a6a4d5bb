from abc import ABC, abstractmethod


class BaseBandit(ABC):
    """
    Abstract base class for all arm-selection algorithms.

    Each agent owns its own instance, so subclasses keep whatever progress
    state they need. This base class only provides the interface.
    """

    name = "bandit"

    @abstractmethod
    def select_arm(self, memory) -> int:
        """
        Select the next arm to pull.

        Args:
            memory (AgentMemory): The memory of the agent this algorithm works for.

        Returns:
            int: An encoded pull request (see memory.pull_request).
        """
        raise NotImplementedError

    @abstractmethod
    def duplicate(self) -> "BaseBandit":
        """Return a fresh instance with the same initial parameters."""
        raise NotImplementedError

    def requires_initial_budget(self) -> bool:
        """True if the algorithm must know the whole budget upfront (root agents only)."""
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
