"""
Construction and reset of supply trees.

Non-leaf nodes are AgentSuppliers choosing among their children; leaves are
SimpleSuppliers. Within each group of siblings, the child built with the
lowest mean time is flagged as the best arm and the group is then shuffled.
"""
import logging

import numpy as np

from .suppliers import AgentSupplier, SimpleSupplier

logger = logging.getLogger(__name__)

COST = 1.0
MEAN_TIME_MINIMUM = 10.0
MEAN_TIME_INCREMENT = 0.25
ROOT_CHILDREN = 20
NONROOT_CHILDREN = 5
TREE_DEPTH = 2
SUPER_FACTOR = 1.0 / 3.0


def _child_algorithm(algorithm, fallback):
    """Non-root agents run the fallback when one is set."""
    return fallback if fallback is not None else algorithm


def _build_node(depth, num_children, mean_time, spread, child_parameters, algorithm, is_root,
                distribution, scale, rng, cost, nonroot_children, fallback):
    if depth == 1:
        return SimpleSupplier(cost, mean_time, distribution, scale, rng, spread)

    children = []
    for i in range(num_children):
        child_mean, child_spread = child_parameters(i, num_children)
        child = _build_node(depth - 1, nonroot_children, child_mean, child_spread, child_parameters,
                            _child_algorithm(algorithm, fallback), False, distribution, scale, rng,
                            cost, nonroot_children, fallback)
        child.is_best_arm = i == 0
        children.append(child)

    order = rng.permutation(len(children))
    children = [children[i] for i in order]

    # The budget multiplier has no effect on the root, which never supplies.
    return AgentSupplier(algorithm.duplicate(), children, cost, mean_time, distribution, scale,
                         num_children, is_root, rng, spread)


def construct_tree(depth: int = TREE_DEPTH, root_children: int = ROOT_CHILDREN, algorithm=None,
                   distribution=None, scale: float = 1.0, rng: np.random.Generator = None,
                   cost: float = COST, nonroot_children: int = NONROOT_CHILDREN,
                   mean_time_minimum: float = MEAN_TIME_MINIMUM,
                   mean_time_increment: float = MEAN_TIME_INCREMENT, fallback=None):
    """
    Build a tree whose sibling means grow linearly:
    child i has mean `mean_time_minimum + i * mean_time_increment`.

    Args:
        depth (int): Height of the tree including the root.
        root_children (int): Number of children of the root.
        algorithm (BaseBandit): Algorithm of the root (and of every agent without fallback).
        distribution (Distribution): Distribution of every node's service time.
        scale (float): Spread of every node's service time.
        rng (np.random.Generator): Shared source of randomness.
        fallback (BaseBandit, optional): Algorithm used by all non-root agents.

    Returns:
        AgentSupplier: The root of the new tree.
    """
    rng = rng if rng is not None else np.random.default_rng()

    def child_parameters(i, num_children):
        return mean_time_minimum + i * mean_time_increment, 1.0

    return _build_node(depth, root_children, mean_time_minimum, 1.0, child_parameters, algorithm, True,
                       distribution, scale, rng, cost, nonroot_children, fallback)


def construct_tree_super(depth: int = TREE_DEPTH, root_children: int = ROOT_CHILDREN, algorithm=None,
                         distribution=None, scale: float = 1.0, rng: np.random.Generator = None,
                         cost: float = COST, nonroot_children: int = NONROOT_CHILDREN,
                         mean_time_minimum: float = MEAN_TIME_MINIMUM,
                         mean_time_increment: float = MEAN_TIME_INCREMENT,
                         super_factor: float = SUPER_FACTOR, fallback=None):
    """
    Build a tree whose sibling means grow as a power of their position:
    `minimum + (n - 1) * increment * (i / (n - 1)) ** super_factor`.

    A super_factor above 1 is superlinear, between 0 and 1 sublinear.
    """
    rng = rng if rng is not None else np.random.default_rng()

    def child_parameters(i, num_children):
        if num_children == 1:
            return mean_time_minimum, 1.0
        fraction = i / (num_children - 1)
        return mean_time_minimum + (num_children - 1) * mean_time_increment * fraction ** super_factor, 1.0

    return _build_node(depth, root_children, 0.0, 1.0, child_parameters, algorithm, True,
                       distribution, scale, rng, cost, nonroot_children, fallback)


def construct_tree_terraced(depth: int = TREE_DEPTH, root_children: int = ROOT_CHILDREN, algorithm=None,
                            distribution=None, scale: float = 1.0, rng: np.random.Generator = None,
                            cost: float = COST, nonroot_children: int = NONROOT_CHILDREN,
                            mean_time_minimum: float = MEAN_TIME_MINIMUM,
                            mean_time_increment: float = MEAN_TIME_INCREMENT, fallback=None):
    """
    Build a tree with three terraces of siblings: one noiseless best child,
    a good half offset by half an increment and a worst rest offset by one
    and a half increments. Only the best terrace has zero spread.
    """
    rng = rng if rng is not None else np.random.default_rng()

    def child_parameters(i, num_children):
        if i == 0:
            return mean_time_minimum, 0.0
        if i < (num_children + 1) // 2:
            return mean_time_minimum + mean_time_increment * 0.5, 1.0
        return mean_time_minimum + mean_time_increment * 1.5, 1.0

    return _build_node(depth, root_children, 0.0, 1.0, child_parameters, algorithm, True,
                       distribution, scale, rng, cost, nonroot_children, fallback)


TREE_BUILDERS = {
    "linear": construct_tree,
    "super": construct_tree_super,
    "terraced": construct_tree_terraced,
}


def iter_agents(root):
    """Yield every agent of the tree, parents before children."""
    if root.is_leaf():
        return
    yield root
    for child in root.children:
        yield from iter_agents(child)


def reset_tree(root, algorithm=None, distribution=None, scale: float = 1.0, fallback=None) -> None:
    """
    Reset every agent of a tree so it can be used in another trial.

    Args:
        root (Supplier): The root of the tree.
        algorithm (BaseBandit, optional): New algorithm to use, or None to keep
            (a fresh duplicate of) the current one.
        distribution (Distribution, optional): New service-time distribution.
            Defaults to each node's current one.
        scale (float): New scale. Each supplier keeps its own spread.
        fallback (BaseBandit, optional): Algorithm for non-root agents when a
            new algorithm is given.
    """
    _reset_node(root, algorithm, distribution, scale, fallback)


def _reset_node(node, algorithm, distribution, scale, fallback):
    node_distribution = distribution if distribution is not None else node.distribution

    if node.is_leaf():
        node.reset(node_distribution, scale)
        return

    node.reset(node_distribution, scale,
               algorithm.duplicate() if algorithm is not None else None)

    child_algorithm = _child_algorithm(algorithm, fallback) if algorithm is not None else None
    for child in node.children:
        _reset_node(child, child_algorithm, distribution, scale, fallback)
