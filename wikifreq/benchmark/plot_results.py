#!/usr/bin/env python3
"""
Generate plots from benchmark results.
"""

import json
import sys
import logging
import argparse
from collections import defaultdict
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from wikifreq.common.config import configure_logging

logger = logging.getLogger(__name__)

PLOTS_DIR = Path("benchmark_results/plots")


def load_results(json_file):
    """Load benchmark results from JSON file."""
    with open(json_file, 'r') as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Aggregate multiple runs of the same benchmark.
    Returns dict: benchmark_name -> {avg_runtime, std_runtime, num_workers, ...}
    """
    by_benchmark = defaultdict(list)
    for r in results:
        if r['success']:
            by_benchmark[r['benchmark_name']].append(r)

    aggregated = {}
    for name, runs in by_benchmark.items():
        runtimes = [r['total_runtime_seconds'] for r in runs]
        throughputs = [r['throughput_mbps'] for r in runs]
        first = runs[0]

        aggregated[name] = {
            'benchmark_name': name,
            'executor': first['executor'],
            'num_workers': first['num_workers'],
            'input_size_mb': first['input_size_mb'],
            'avg_runtime': float(np.mean(runtimes)),
            'std_runtime': float(np.std(runtimes)),
            'min_runtime': float(np.min(runtimes)),
            'max_runtime': float(np.max(runtimes)),
            'avg_throughput': float(np.mean(throughputs)),
            'num_runs': len(runs)
        }

    return aggregated


def _series(aggregated, value_key, std_key=None):
    by_executor = defaultdict(list)
    for v in aggregated.values():
        std = v[std_key] if std_key else 0.0
        by_executor[v['executor']].append((v['num_workers'], v[value_key], std))
    for points in by_executor.values():
        points.sort()
    return by_executor


def plot_worker_scaling(aggregated, output_file):
    """Plot runtime vs number of workers, one line per executor kind."""
    series = _series(aggregated, 'avg_runtime', 'std_runtime')
    if not series:
        logger.warning("No worker scaling data found")
        return False

    plt.figure(figsize=(10, 6))
    for executor, points in sorted(series.items()):
        workers, runtimes, stds = zip(*points)
        plt.errorbar(workers, runtimes, yerr=stds, marker='o', capsize=5,
                     linewidth=2, markersize=8, label=executor)
    plt.xlabel('Number of Workers', fontsize=12)
    plt.ylabel('Runtime (seconds)', fontsize=12)
    plt.title('create-frequencies: Worker Scaling', fontsize=14, fontweight='bold')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    logger.info(f"Saved: {output_file}")
    plt.close()
    return True


def plot_throughput(aggregated, output_file):
    """Plot counting throughput vs number of workers."""
    series = _series(aggregated, 'avg_throughput')
    if not series:
        logger.warning("No throughput data found")
        return False

    all_workers = sorted({w for points in series.values() for w, _, _ in points})
    slot = {w: i for i, w in enumerate(all_workers)}

    plt.figure(figsize=(10, 6))
    width = 0.8 / len(series)
    for i, (executor, points) in enumerate(sorted(series.items())):
        workers, throughputs, _ = zip(*points)
        positions = np.array([slot[w] for w in workers]) + i * width
        plt.bar(positions, throughputs, width=width, label=executor)
    plt.xticks(np.arange(len(all_workers)) + width * (len(series) - 1) / 2, all_workers)
    plt.xlabel('Number of Workers', fontsize=12)
    plt.ylabel('Throughput (MB/s)', fontsize=12)
    plt.title('create-frequencies: Counting Throughput', fontsize=14, fontweight='bold')
    plt.legend()
    plt.grid(True, axis='y', alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    logger.info(f"Saved: {output_file}")
    plt.close()
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description='Plot benchmark results')
    parser.add_argument('results_file', help='JSON file produced by the benchmark')
    parser.add_argument('--plots-dir', default=str(PLOTS_DIR))
    args = parser.parse_args(argv)

    configure_logging()
    plots_dir = Path(args.plots_dir)
    plots_dir.mkdir(parents=True, exist_ok=True)

    aggregated = aggregate_runs(load_results(args.results_file))
    if not aggregated:
        logger.error("No successful runs to plot")
        return 1

    plot_worker_scaling(aggregated, plots_dir / 'worker_scaling.png')
    plot_throughput(aggregated, plots_dir / 'throughput.png')
    return 0


if __name__ == "__main__":
    sys.exit(main())
