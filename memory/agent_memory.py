import logging

from . import pull_request
from .arm_record import ArmRecord
from .sorted_list import SortedList

logger = logging.getLogger(__name__)


class AgentMemory:
    """
    An agent's memory of each of its arms, viewable by index or by rank.

    `by_index` keeps the records in creation order. `by_rank` keeps the same
    records in their natural order: decreasing mean time, so rank 0 is the
    worst arm and the last rank is the best.
    """

    def __init__(self, suppliers):
        """
        Args:
            suppliers: The agent's child suppliers. Each must provide `supply()`
                and an `is_best_arm` flag.
        """
        self.by_index = [ArmRecord(supplier, i) for i, supplier in enumerate(suppliers)]
        self.by_rank = SortedList()
        for arm in self.by_index:
            self.by_rank.append(arm)

    def reset(self) -> None:
        """Forget every observation. Records are re-appended in index order."""
        self.by_rank.clear()
        for arm in self.by_index:
            arm.reset()
            self.by_rank.append(arm)

    def pull(self, request: int) -> float:
        """
        Pull the requested arm and update both views.

        The record is taken out of the ranked view before its statistics
        change and re-inserted afterwards.

        Args:
            request: An encoded pull request (see memory.pull_request).

        Returns:
            float: The time the arm took to supply us.
        """
        index_in_list = pull_request.position(request)
        if pull_request.uses_ranked_view(request):
            arm = self.by_rank.pop(index_in_list)
        else:
            arm = self.by_index[index_in_list]
            self.by_rank.remove(arm)

        duration = arm.supplier.supply()
        arm.record_pull(duration)
        self.by_rank.add(arm)

        logger.debug(f"Pulled arm {arm.index}: {duration:.4f} (mean {arm.mean_time:.4f})")
        return duration

    def size(self) -> int:
        return len(self.by_index)

    def __len__(self) -> int:
        return len(self.by_index)

    @property
    def best(self) -> ArmRecord:
        """The currently top-ranked arm."""
        return self.by_rank[-1]

    def get_index(self, request: int) -> int:
        """Resolve a pull request to the index of the arm it addresses."""
        index = pull_request.position(request)
        if pull_request.uses_ranked_view(request):
            index = self.by_rank[index].index
        return index

    def ranked_snapshot(self) -> SortedList:
        """A copy of the ranked view that later pulls will not reorder."""
        return self.by_rank.copy()

    def average_from(self, start_rank: int) -> float:
        """Mean of the arms' mean times from start_rank (inclusive) to the best arm."""
        if start_rank >= len(self.by_rank):
            raise ValueError(f"start_rank {start_rank} is past the last rank ({len(self.by_rank) - 1})")
        means = [self.by_rank[i].mean_time for i in range(start_rank, len(self.by_rank))]
        return sum(means) / len(means)

    def is_top_rank_optimal(self) -> bool:
        """Whether the top-ranked arm is really the best one. For regret analysis only."""
        return bool(self.best.supplier.is_best_arm)

    def enable_sample_tracking(self) -> None:
        for arm in self.by_index:
            arm.enable_sample_tracking()

    def __str__(self) -> str:
        return str(self.by_rank)
