#!/usr/bin/env python3
"""
Benchmark create-frequencies across worker counts.
Runs each configuration several times and saves the collected metrics.
"""

import csv
import json
import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path

from wikifreq.common.config import DICTIONARY_DIR, EXECUTOR_KINDS, FrequencyJob, configure_logging
from wikifreq.coordinator.frequencies import handle_create_frequencies
from wikifreq.coordinator.metrics import MetricsCollector

logger = logging.getLogger(__name__)

RESULTS_DIR = Path("benchmark_results")
DEFAULT_WORKER_COUNTS = [1, 2, 4, 8]

CSV_FIELDS = [
    'benchmark_name', 'executor', 'num_workers', 'num_shards', 'run',
    'success', 'total_runtime_seconds', 'map_phase_seconds', 'write_phase_seconds',
    'input_size_mb', 'throughput_mbps', 'peak_memory_mb'
]


def run_benchmark(input_dir, language_code, worker_counts, executor='process', runs=3,
                  dictionary_dir=DICTIONARY_DIR, output_file='benchmark.arpa'):
    """
    Run create-frequencies for every worker count, `runs` times each.

    Returns:
        List of result dictionaries, one per run
    """
    collector = MetricsCollector()
    results = []

    for num_workers in worker_counts:
        name = f"{executor}_workers_{num_workers}"
        for run in range(1, runs + 1):
            logger.info(f"Running {name} (run {run}/{runs})")
            job = FrequencyJob(
                input_dir=str(input_dir),
                output_file=output_file,
                language_code=language_code,
                max_workers=num_workers,
                executor=executor,
                dictionary_dir=dictionary_dir
            )
            try:
                metrics = handle_create_frequencies(job, collector)
            except Exception as e:
                logger.error(f"{name} run {run} failed: {e}")
                results.append({
                    'benchmark_name': name, 'executor': executor,
                    'num_workers': num_workers, 'run': run, 'success': False,
                    'error': str(e)
                })
                continue

            results.append({
                'benchmark_name': name,
                'executor': executor,
                'num_workers': num_workers,
                'num_shards': metrics.num_shards,
                'run': run,
                'success': True,
                'total_runtime_seconds': metrics.total_time_seconds,
                'map_phase_seconds': metrics.map_phase_time_seconds,
                'write_phase_seconds': metrics.write_phase_time_seconds,
                'input_size_mb': metrics.input_size_bytes / (1024 * 1024),
                'throughput_mbps': metrics.throughput_mbps,
                'peak_memory_mb': metrics.peak_memory_bytes / (1024 * 1024)
            })

    return results


def save_results(results, results_dir=RESULTS_DIR):
    """Save results as timestamped JSON and CSV files and return their paths."""
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    json_path = results_dir / f"benchmark_{timestamp}.json"
    with open(json_path, 'w') as f:
        json.dump(results, f, indent=2)

    csv_path = results_dir / f"benchmark_{timestamp}.csv"
    with open(csv_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS, extrasaction='ignore')
        writer.writeheader()
        writer.writerows(results)

    logger.info(f"Saved results to {json_path} and {csv_path}")
    return json_path, csv_path


def main(argv=None):
    parser = argparse.ArgumentParser(description='Benchmark create-frequencies across worker counts')
    parser.add_argument('--input-dir', required=True, help='Directory of shard files')
    parser.add_argument('--language', required=True, help='Dictionary language code')
    parser.add_argument('--dictionary-dir', default=DICTIONARY_DIR)
    parser.add_argument('--workers', type=int, nargs='+', default=DEFAULT_WORKER_COUNTS,
                        help=f'Worker counts to benchmark (default: {DEFAULT_WORKER_COUNTS})')
    parser.add_argument('--executor', choices=EXECUTOR_KINDS, default='process')
    parser.add_argument('--runs', type=int, default=3, help='Runs per configuration (default: 3)')
    parser.add_argument('--results-dir', default=str(RESULTS_DIR))
    args = parser.parse_args(argv)

    configure_logging()
    results = run_benchmark(
        args.input_dir, args.language, args.workers, executor=args.executor,
        runs=args.runs, dictionary_dir=args.dictionary_dir
    )
    save_results(results, args.results_dir)
    return 0 if all(r['success'] for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
