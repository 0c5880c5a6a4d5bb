import numpy as np
import pytest

from memory import AgentMemory, pull_request


def rank_indices(memory):
    return [arm.index for arm in memory.by_rank]


def assert_consistent(memory):
    ranked = list(memory.by_rank)
    assert len(ranked) == len(memory.by_index)
    assert sorted(arm.index for arm in ranked) == list(range(len(memory.by_index)))
    keys = [(-arm.mean_time, arm.index) for arm in ranked]
    assert keys == sorted(keys)


def test_initial_views(make_memory):
    memory = make_memory([1.0], [2.0], [3.0])
    assert memory.size() == len(memory) == 3
    assert rank_indices(memory) == [0, 1, 2]
    assert [arm.index for arm in memory.by_index] == [0, 1, 2]


def test_first_pull_ranks_arm_best(make_memory):
    memory = make_memory([7.0], [5.0], [6.0])

    duration = memory.pull(pull_request.by_index(1))

    assert duration == 5.0
    assert memory.best.index == 1
    # Untested arms tie at the worst value and fall back to index order
    assert rank_indices(memory) == [0, 2, 1]


def test_pull_by_rank(constant_memory):
    memory = constant_memory
    # Rank 0 of an untested memory is arm 0
    assert memory.pull(pull_request.by_rank(0)) == 4.0
    assert memory.by_index[0].pulls == 1
    assert memory.best.index == 0

    memory.pull(pull_request.by_rank(0))
    # Arm 1 was the worst (untested, lowest index) and is now the best
    assert memory.by_index[1].pulls == 1
    assert memory.best.index == 1


def test_ranking_stays_consistent_under_random_pulls(make_memory):
    rng = np.random.default_rng(7)
    scripts = [list(rng.uniform(1, 10, size=5)) for _ in range(6)]
    memory = make_memory(*scripts)

    for _ in range(200):
        if rng.random() < 0.5:
            request = pull_request.by_rank(int(rng.integers(memory.size())))
        else:
            request = pull_request.by_index(int(rng.integers(memory.size())))
        memory.pull(request)
        assert_consistent(memory)


def test_get_index(constant_memory):
    memory = constant_memory
    memory.pull(pull_request.by_index(2))
    assert memory.get_index(pull_request.by_index(3)) == 3
    assert memory.get_index(pull_request.by_rank(memory.size() - 1)) == 2
    assert memory.get_index(pull_request.by_rank(0)) == 0


def test_reset(constant_memory):
    memory = constant_memory
    memory.enable_sample_tracking()
    for index in [3, 1, 2, 3]:
        memory.pull(pull_request.by_index(index))

    memory.reset()

    assert rank_indices(memory) == [0, 1, 2, 3]
    for arm in memory.by_index:
        assert arm.is_unpulled()
        assert not arm.tracks_samples
        assert len(arm.samples) == 0


def test_snapshot_is_frozen(constant_memory):
    memory = constant_memory
    snapshot = memory.ranked_snapshot()
    memory.pull(pull_request.by_index(1))

    assert [arm.index for arm in snapshot] == [0, 1, 2, 3]
    assert rank_indices(memory) == [0, 2, 3, 1]
    # Records are shared, not copied
    assert snapshot[1] is memory.by_index[1]


def test_average_from(constant_memory):
    memory = constant_memory
    for index in range(4):
        memory.pull(pull_request.by_index(index))

    # Ranked means: 4, 3, 2, 1
    assert memory.average_from(0) == pytest.approx(2.5)
    assert memory.average_from(2) == pytest.approx(1.5)
    assert memory.average_from(3) == pytest.approx(1.0)
    with pytest.raises(ValueError):
        memory.average_from(4)


def test_is_top_rank_optimal(constant_memory):
    memory = constant_memory
    memory.pull(pull_request.by_index(0))
    assert not memory.is_top_rank_optimal()

    memory.pull(pull_request.by_index(1))
    assert memory.is_top_rank_optimal()


def test_sample_tracking_on_all_arms(constant_memory):
    memory = constant_memory
    memory.enable_sample_tracking()
    memory.pull(pull_request.by_index(2))
    assert list(memory.by_index[2].samples) == [3.0]
    assert all(arm.tracks_samples for arm in memory.by_index)


def test_empty_constructor_list():
    memory = AgentMemory([])
    assert memory.size() == 0
