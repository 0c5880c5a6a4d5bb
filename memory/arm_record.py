import math
from fractions import Fraction

from .sorted_list import SortedList

# Decimal places kept by the dominance probability division.
PROBABILITY_PRECISION = 5


def _descending(sample: float) -> float:
    return -sample


class ArmRecord:
    """
    Running statistics about one supplier (arm), plus a reference to it.

    Records order by decreasing mean time (increasing utility), ties broken by
    ascending index, so the best arm sorts last. Equality and hashing use the
    index only.
    """

    def __init__(self, supplier, index: int):
        self.supplier = supplier
        self.index = index
        self.total_time = 0.0
        self.pulls = 0
        self.tracks_samples = False
        # Worst sample first.
        self.samples = SortedList(key=_descending)
        self._probability_cache = None

    def reset(self) -> None:
        """Zero the statistics and drop sample tracking."""
        self.total_time = 0.0
        self.pulls = 0
        self.tracks_samples = False
        self.samples.clear()
        self._probability_cache = None

    def enable_sample_tracking(self) -> None:
        """
        Keep every individual sample from now on.

        This costs time and memory on every pull and few algorithms need it,
        so it is off by default and switched off again by reset().
        """
        self.tracks_samples = True

    def record_pull(self, duration: float) -> None:
        """Record the time the supplier just took."""
        self.total_time += duration
        self.pulls += 1

        if self.tracks_samples:
            self.samples.add(duration)
            self._probability_cache = None

    def is_unpulled(self) -> bool:
        return self.pulls == 0

    @property
    def mean_time(self) -> float:
        """Average time taken, or infinity for an untested arm (worst utility)."""
        if self.is_unpulled():
            return math.inf
        return self.total_time / self.pulls

    @property
    def rank_key(self) -> tuple:
        return (-self.mean_time, self.index)

    def __lt__(self, other: "ArmRecord") -> bool:
        return self.rank_key < other.rank_key

    def __eq__(self, other) -> bool:
        if not isinstance(other, ArmRecord):
            return NotImplemented
        return self.index == other.index

    def __hash__(self) -> int:
        return hash(self.index)

    def __str__(self) -> str:
        return f"{self.mean_time:.2f}"

    def __repr__(self) -> str:
        return f"ArmRecord(index={self.index}, pulls={self.pulls}, mean_time={self.mean_time:.4f})"

    def dominance_probability(self, best: "ArmRecord") -> float:
        """
        Probability of this arm's samples occurring in the best arm's distribution.

        Counts the size-|self| subsets of the best arm's samples that can be
        paired one-to-one with this arm's samples, each pairing a sample of
        ours with a best-arm sample that is equal or worse (no best-arm sample
        reused), and divides by C(|best|, |self|), the total number of subsets.

        Samples are processed from worst to best. For the sample at position p
        the number of best-arm samples at least as bad, minus the p already
        paired, is the number of pairings left for it; if that ever reaches
        zero no valid subset exists and the probability is exactly zero.

        Parameters
        ----------
        best : ArmRecord
            The arm to compare against, normally the current top rank.

        Returns
        -------
        float
            The probability, rounded half-even to PROBABILITY_PRECISION
            decimal places. Zero when the best arm has fewer samples than this one.
        """
        # Keyed by the best arm and how many samples it had, so new best-arm
        # samples are never compared against a stale value.
        cache_key = (best.index, len(best.samples))
        cached = self._probability_cache
        if cached is not None and cached[0] == cache_key:
            return cached[1]

        best_samples = best.samples
        own_samples = self.samples

        # You cannot choose k items out of fewer than k.
        if len(best_samples) < len(own_samples):
            return 0.0

        pairable = True
        for position, sample in enumerate(own_samples):
            worse = best_samples.last_index_of(sample)
            if worse < len(best_samples) and best_samples[worse] == sample:
                worse += 1
            # pairings left for this sample
            if worse - position <= 0:
                pairable = False
                break

        valid_subsets = _count_dominated_subsets(best_samples, own_samples) if pairable else 0

        total_subsets = math.comb(len(best_samples), len(own_samples))
        probability = float(round(Fraction(valid_subsets, total_subsets), PROBABILITY_PRECISION))

        assert probability <= 1.0, f"Over 100% doesn't make sense: {valid_subsets}/{total_subsets}"

        self._probability_cache = (cache_key, probability)
        return probability


def _count_dominated_subsets(best_samples, own_samples) -> int:
    """
    Number of size-k subsets of best_samples whose j-th worst element is at
    least as bad as the j-th worst of own_samples, for every j.

    Both sequences are sorted worst first.
    """
    k = len(own_samples)
    # ways[j]: subsets of the samples seen so far whose j members pair with own_samples[:j]
    ways = [1] + [0] * k
    for sample in best_samples:
        for j in range(k - 1, -1, -1):
            if ways[j] and sample >= own_samples[j]:
                ways[j + 1] += ways[j]
    return ways[k]
