import itertools

import pytest

from memory import AgentMemory


class ScriptedSupplier:
    """A supplier whose service times cycle through a fixed script."""

    def __init__(self, durations, is_best_arm=False):
        self._durations = itertools.cycle(durations)
        self.is_best_arm = is_best_arm
        self.supplied = 0

    def supply(self) -> float:
        self.supplied += 1
        return next(self._durations)


class FixedRandom:
    """Stands in for a numpy Generator that always draws the same number."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def integers(self, high) -> int:
        return 0


@pytest.fixture
def make_memory():
    """Build an AgentMemory over scripted suppliers, one duration list per arm."""
    def _make(*scripts, best=None):
        suppliers = [ScriptedSupplier(script, is_best_arm=(i == best)) for i, script in enumerate(scripts)]
        return AgentMemory(suppliers)
    return _make


@pytest.fixture
def constant_memory(make_memory):
    """Four arms with constant service times 4, 1, 3 and 2; arm 1 is the best."""
    return make_memory([4.0], [1.0], [3.0], [2.0], best=1)


def _drive(algorithm, memory, steps):
    requests = []
    for _ in range(steps):
        request = algorithm.select_arm(memory)
        memory.pull(request)
        requests.append(request)
    return requests


@pytest.fixture
def run():
    """Let an algorithm drive a memory for a number of steps; returns its requests."""
    return _drive


@pytest.fixture
def fixed_random():
    """Factory for generators that always draw the same number."""
    return FixedRandom
