from .base_bandit import BaseBandit
from .random_choice import RandomBandit
from .greedy import Greedy
from .epsilon_first import EpsilonFirst
from .kde import KDE
from .lsplit import LSplit
from .peef import PEEF
from .soaav import SOAAV
from .confidence_greedy import ConfidenceBiasedGreedy
from .ucb import UCB_BV1
