"""Service-time distributions. Sampling is delegated to numpy generators."""
from abc import ABC, abstractmethod

import numpy as np


class Distribution(ABC):
    """A real distribution exposing `sample(rng)` and its numerical `mean`."""

    mean = 0.0

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> float:
        raise NotImplementedError


class NormalDistribution(Distribution):
    def __init__(self, loc: float = 0.0, std: float = 1.0):
        self.loc = loc
        self.std = std
        self.mean = loc

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.normal(self.loc, self.std))


class UniformDistribution(Distribution):
    def __init__(self, low: float = 0.0, high: float = 1.0):
        self.low = low
        self.high = high
        self.mean = (low + high) / 2

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.low, self.high))


class BetaDistribution(Distribution):
    def __init__(self, a: float, b: float):
        self.a = a
        self.b = b
        self.mean = a / (a + b)

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.beta(self.a, self.b))


class ChiSquaredDistribution(Distribution):
    def __init__(self, df: float):
        self.df = df
        self.mean = df

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.chisquare(self.df))


DISTRIBUTION_MAP = {
    "normal": NormalDistribution,
    "uniform": UniformDistribution,
    "beta": BetaDistribution,
    "chisquared": ChiSquaredDistribution,
}


def get_distribution(config: dict) -> Distribution:
    """Build a distribution from a config mapping such as `{type: beta, a: 0.5, b: 0.5}`."""
    params = dict(config)
    dist_type = params.pop("type", "normal")
    if dist_type not in DISTRIBUTION_MAP:
        raise ValueError(f"Unknown distribution: {dist_type}")
    return DISTRIBUTION_MAP[dist_type](**params)
