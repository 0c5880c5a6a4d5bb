import os
import argparse
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd
import yaml

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def load_results(results_dir: str, experiment_name: str) -> pd.DataFrame:
    """Loads the results CSV of an experiment."""
    path = os.path.join(results_dir, f"{experiment_name}.csv")
    if not os.path.exists(path):
        raise FileNotFoundError(f"No result file found at: {path}")
    return pd.read_csv(path)


def plot_time_taken(df: pd.DataFrame, parameter: str, config: dict, figures_dir: str) -> str:
    """Plots the mean time taken against the swept parameter, one line per algorithm."""
    plt.figure(figsize=(12, 8))

    for algo_name in df['algorithm_name'].unique():
        algo_df = df[df['algorithm_name'] == algo_name].sort_values(parameter)
        plt.plot(algo_df[parameter], algo_df['mean_time_taken'], marker='o', label=algo_name)

    plt.title(f"Average Time Taken: {config['experiment_name']}")
    plt.xlabel(parameter.capitalize())
    plt.ylabel("Average Time Taken")
    plt.legend()
    plt.grid(True)
    path = os.path.join(figures_dir, f"{config['experiment_name']}_time_taken.png")
    plt.savefig(path)
    plt.close()
    return path


def generate_summary_table(df: pd.DataFrame) -> pd.DataFrame:
    """Averages every algorithm's results over the sweep, best first."""
    summary = df.groupby('algorithm_name').agg(
        mean_time_taken=('mean_time_taken', 'mean'),
        optimal_rate=('optimal_rate', 'mean'),
    ).reset_index()
    summary.rename(columns={'mean_time_taken': 'Mean Time Taken', 'optimal_rate': 'Optimal Rate'}, inplace=True)
    return summary.sort_values(by='Mean Time Taken').reset_index(drop=True)


def main(config_path: str):
    """Main function to load, plot, and summarize experiment results."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    results_dir = config.get('results_dir', 'results')
    figures_dir = 'figures'
    os.makedirs(figures_dir, exist_ok=True)

    df = load_results(results_dir, config['experiment_name'])
    if df.empty:
        logger.warning("No results found to evaluate.")
        return

    parameter = config['sweep']['parameter']
    path = plot_time_taken(df, parameter, config, figures_dir)
    logger.info(f"Saved plot to {path}")

    print("\n--- Performance Summary ---")
    print(generate_summary_table(df).to_markdown(index=False))


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Evaluate experiment results.")
    parser.add_argument('--config', type=str, required=True, help='Path to the configuration file.')
    args = parser.parse_args()
    main(args.config)
