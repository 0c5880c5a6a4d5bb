from .distributions import (
    Distribution,
    NormalDistribution,
    UniformDistribution,
    BetaDistribution,
    ChiSquaredDistribution,
    get_distribution,
)
from .suppliers import Supplier, SimpleSupplier, AgentSupplier
from .supply_tree import (
    construct_tree,
    construct_tree_super,
    construct_tree_terraced,
    iter_agents,
    reset_tree,
)
