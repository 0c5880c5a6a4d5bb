import os
import argparse
import logging

import numpy as np
import pandas as pd
import yaml
from tqdm import tqdm

from bandits import (
    RandomBandit,
    Greedy,
    EpsilonFirst,
    KDE,
    LSplit,
    PEEF,
    SOAAV,
    ConfidenceBiasedGreedy,
    UCB_BV1,
)
from environments.distributions import get_distribution
from environments.supply_tree import TREE_BUILDERS, iter_agents, reset_tree

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# A mapping from algorithm name string (in YAML) to the actual class
ALGO_MAP = {
    "RandomBandit": RandomBandit,
    "Greedy": Greedy,
    "EpsilonFirst": EpsilonFirst,
    "KDE": KDE,
    "LSplit": LSplit,
    "PEEF": PEEF,
    "SOAAV": SOAAV,
    "ConfidenceBiasedGreedy": ConfidenceBiasedGreedy,
    "UCB_BV1": UCB_BV1,
}

# Algorithms that draw random numbers and take a generator
RANDOMIZED = (RandomBandit, KDE, ConfidenceBiasedGreedy)


def get_algorithm_by_name(class_name: str, params: dict, budget: float, num_arms: int,
                          cost: float, rng: np.random.Generator):
    """Factory function to create an algorithm instance from config."""
    if class_name not in ALGO_MAP:
        raise ValueError(f"Unknown algorithm class: {class_name}")

    AlgoClass = ALGO_MAP[class_name]
    params = dict(params or {})

    # Budget-dependent algorithms learn the budget and tree shape from the experiment
    if AlgoClass in (EpsilonFirst, KDE, PEEF):
        params.setdefault('initial_budget', budget)
    if AlgoClass in (EpsilonFirst, KDE):
        params.setdefault('cost', cost)
    if AlgoClass is PEEF:
        params.setdefault('num_arms', num_arms)
    if issubclass(AlgoClass, RANDOMIZED):
        params['rng'] = rng

    return AlgoClass(**params)


def sweep_values(sweep: dict) -> np.ndarray:
    """Values of the independent variable, both ends inclusive."""
    return np.arange(sweep['start'], sweep['stop'] + sweep['step'] / 2, sweep['step'])


def run_trials(root, algorithm, fallback, distribution, scale: float, budget: float, trials: int) -> dict:
    """Run every trial of one algorithm and summarise them."""
    times = np.zeros(trials)
    optimal = np.zeros(trials, dtype=bool)

    for trial in range(trials):
        # New algorithm on the first trial, fresh duplicates afterwards
        reset_tree(root, algorithm if trial == 0 else None, distribution, scale, fallback)
        root.explore(budget)
        times[trial] = root.total_time_taken
        optimal[trial] = root.memory.is_top_rank_optimal()

    return {
        'mean_time_taken': times.mean(),
        'std_time_taken': times.std(),
        'optimal_rate': optimal.mean(),
    }


def main(config_path: str):
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    logger.info("Experiment configuration:\n" + yaml.dump(config, indent=2))

    rng = np.random.default_rng(config.get('seed', 42))
    trials = config.get('trials', 500)
    cost = config.get('cost', 1.0)
    budget = config.get('budget', 200.0)
    scale = config.get('scale', 10.0)
    tree_config = dict(config.get('tree', {}))
    distribution = get_distribution(config.get('distribution', {'type': 'normal'}))
    sweep = config['sweep']
    parameter = sweep['parameter']
    if parameter not in ('scale', 'budget'):
        raise ValueError(f"Unknown sweep parameter: {parameter}")

    builder = TREE_BUILDERS[tree_config.pop('shape', 'linear')]
    num_arms = tree_config.get('root_children', 20)

    fallback_config = config.get('fallback_algorithm')
    results = []
    tasks = [(value, algo_config) for value in sweep_values(sweep) for algo_config in config['algorithms']]
    logger.info(f"Running {len(tasks)} tasks of {trials} trials each...")

    root = None
    for value, algo_config in tqdm(tasks):
        if parameter == 'scale':
            scale = float(value)
        else:
            budget = float(value)

        algorithm = get_algorithm_by_name(algo_config['class'], algo_config.get('params'),
                                          budget, num_arms, cost, rng)
        fallback = None
        if fallback_config:
            fallback = get_algorithm_by_name(fallback_config['class'], fallback_config.get('params'),
                                             budget, num_arms, cost, rng)

        if root is None:
            root = builder(algorithm=algorithm, distribution=distribution, scale=scale, rng=rng,
                           cost=cost, fallback=fallback, **tree_config)
            logger.info(f"Built a tree of {sum(1 for _ in iter_agents(root))} agents")

        summary = run_trials(root, algorithm, fallback, distribution, scale, budget, trials)
        results.append({
            parameter: value,
            'algorithm_name': algo_config['name'],
            **summary,
        })
        logger.info(f"{parameter}={value:g} {algo_config['name']}: "
                    f"average time taken {summary['mean_time_taken']:.2f}")

    results_df = pd.DataFrame(results)

    results_dir = config.get('results_dir', 'results')
    os.makedirs(results_dir, exist_ok=True)
    filename = os.path.join(results_dir, f"{config['experiment_name']}.csv")
    results_df.to_csv(filename, index=False)
    logger.info(f"Results saved to {filename}")
    return results_df


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Compare arm-selection algorithms on a simulated supply chain.")
    parser.add_argument(
        '--config', type=str, required=True,
        help="Path to the experiment configuration YAML file (e.g., 'config/supply_chain.yaml')."
    )
    args = parser.parse_args()
    main(args.config)
