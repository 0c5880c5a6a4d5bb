import itertools
import math

import pytest

from memory import ArmRecord


def record_with_samples(index, samples):
    arm = ArmRecord(supplier=None, index=index)
    arm.enable_sample_tracking()
    for sample in samples:
        arm.record_pull(sample)
    return arm


def test_untested_arm_has_worst_mean():
    untested = ArmRecord(None, 0)
    tested = ArmRecord(None, 1)
    tested.record_pull(1e300)

    assert untested.is_unpulled()
    assert untested.mean_time == math.inf
    # Worse utility sorts first
    assert untested < tested
    assert not tested < untested


def test_running_mean():
    arm = ArmRecord(None, 0)
    for duration in [2.0, 4.0, 9.0]:
        arm.record_pull(duration)
    assert arm.pulls == 3
    assert arm.mean_time == pytest.approx(5.0)
    assert str(arm) == "5.00"


def test_ties_broken_by_index():
    low, high = ArmRecord(None, 0), ArmRecord(None, 1)
    low.record_pull(3.0)
    high.record_pull(3.0)
    assert low < high


def test_equality_uses_index_only():
    a, b = ArmRecord(None, 4), ArmRecord(None, 4)
    a.record_pull(1.0)
    assert a == b
    assert hash(a) == hash(b)
    assert a != ArmRecord(None, 5)


def test_samples_only_tracked_when_enabled():
    arm = ArmRecord(None, 0)
    arm.record_pull(1.0)
    assert len(arm.samples) == 0

    arm.enable_sample_tracking()
    for sample in [2.0, 5.0, 3.0]:
        arm.record_pull(sample)
    assert list(arm.samples) == [5.0, 3.0, 2.0]


def test_reset_clears_everything():
    arm = record_with_samples(0, [1.0, 2.0])
    arm.reset()
    assert arm.pulls == 0
    assert arm.total_time == 0.0
    assert arm.is_unpulled()
    assert not arm.tracks_samples
    assert len(arm.samples) == 0


def test_identical_samples_give_one():
    best = record_with_samples(0, [1.0, 2.0, 3.0, 4.0])
    challenger = record_with_samples(1, [1.0, 2.0, 3.0, 4.0])
    assert challenger.dominance_probability(best) == pytest.approx(1.0)


def test_identical_samples_with_ties_give_one():
    best = record_with_samples(0, [5.0, 5.0])
    challenger = record_with_samples(1, [5.0, 5.0])
    assert challenger.dominance_probability(best) == 1.0
    assert best.dominance_probability(best) == 1.0


def test_fewer_best_samples_give_zero():
    best = record_with_samples(0, [1.0, 2.0])
    challenger = record_with_samples(1, [1.0, 2.0, 3.0])
    assert challenger.dominance_probability(best) == 0.0


def test_single_sample_probability():
    best = record_with_samples(0, [15.0, 11.0, 10.0])
    challenger = record_with_samples(1, [12.0])
    # Only 15 is at least as bad as 12
    assert challenger.dominance_probability(best) == 0.33333


def test_two_sample_probability():
    best = record_with_samples(0, [15.0, 11.0, 10.0])
    challenger = record_with_samples(1, [12.0, 9.0])
    # {15, 11} and {15, 10} pair up, {11, 10} does not
    assert challenger.dominance_probability(best) == 0.66667


def test_no_pairing_gives_zero():
    best = record_with_samples(0, [15.0, 11.0])
    challenger = record_with_samples(1, [30.0])
    assert challenger.dominance_probability(best) == 0.0


def test_probability_never_exceeds_one():
    best = record_with_samples(0, [20.0, 15.0])
    faster = record_with_samples(1, [10.0, 1.0])
    assert faster.dominance_probability(best) == 1.0

    best = record_with_samples(0, [9.0, 8.0, 8.0, 7.0, 3.0])
    for samples in ([1.0], [1.0, 1.0], [8.0, 8.0, 1.0], [2.0, 2.0, 2.0, 2.0], [9.0, 8.0, 8.0, 7.0, 3.0]):
        assert record_with_samples(1, samples).dominance_probability(best) <= 1.0


def count_dominated_subsets(best_samples, own_samples):
    """Brute force: subsets of the best arm's samples that beat ours pairwise, worst to best."""
    own = sorted(own_samples, reverse=True)
    return sum(
        all(b >= o for b, o in zip(sorted(subset, reverse=True), own))
        for subset in itertools.combinations(best_samples, len(own))
    )


def test_each_dominated_subset_counted_once():
    best = record_with_samples(0, [20.0, 15.0, 0.0])
    challenger = record_with_samples(1, [10.0, 1.0])

    # Per-sample pairing counts are 2 (for 10) and 2 - 1 (for 1). Their product,
    # 2 of 3, would count {20, 15} twice. Only {20, 15} dominates.
    assert count_dominated_subsets([20.0, 15.0, 0.0], [10.0, 1.0]) == 1
    assert challenger.dominance_probability(best) == 0.33333


@pytest.mark.parametrize("best_samples, own_samples", [
    ([20.0, 15.0, 0.0], [10.0, 1.0]),
    ([9.0, 8.0, 8.0, 7.0, 3.0], [8.0, 2.0]),
    ([9.0, 8.0, 8.0, 7.0, 3.0], [8.0, 8.0, 1.0]),
    ([6.0, 5.0, 4.0, 3.0, 2.0, 1.0], [4.0, 2.0, 1.0]),
])
def test_probability_matches_subset_count(best_samples, own_samples):
    best = record_with_samples(0, best_samples)
    challenger = record_with_samples(1, own_samples)

    expected = count_dominated_subsets(best_samples, own_samples) / math.comb(len(best_samples), len(own_samples))
    assert challenger.dominance_probability(best) == pytest.approx(expected, abs=5e-6)
    assert challenger.dominance_probability(best) <= 1.0


def test_probability_cache_follows_new_samples():
    best = record_with_samples(0, [15.0, 11.0, 10.0])
    challenger = record_with_samples(1, [12.0])
    assert challenger.dominance_probability(best) == 0.33333

    challenger.record_pull(9.0)
    assert challenger.dominance_probability(best) == 0.66667

    best.record_pull(20.0)
    # Every pair but {11, 10}: 5 of 6
    assert challenger.dominance_probability(best) == 0.83333


def test_probability_recomputed_for_other_best():
    best = record_with_samples(0, [15.0, 11.0, 10.0])
    other_best = record_with_samples(2, [1.0, 1.0, 1.0])
    challenger = record_with_samples(1, [12.0])

    assert challenger.dominance_probability(best) == 0.33333
    assert challenger.dominance_probability(other_best) == 0.0
    assert challenger.dominance_probability(best) == 0.33333
