"""
create-frequencies job: count n-grams over a shard directory and write the
thresholded frequency table next to the shards.
"""

import logging
from typing import Optional

from wikifreq.common.config import EXECUTOR_KINDS, FrequencyJob
from wikifreq.common.vocabulary import get_dictionary
from wikifreq.coordinator.metrics import JobMetrics, MetricsCollector
from wikifreq.coordinator.scheduler import (
    calculate_ngrams_parallel, default_worker_count, discover_shards
)
from wikifreq.coordinator.serializer import check_output_writable, persist_to_file

logger = logging.getLogger(__name__)


def handle_create_frequencies(job: FrequencyJob,
                              collector: Optional[MetricsCollector] = None) -> JobMetrics:
    """
    Run a create-frequencies job end to end.

    Every setup check (input directory, dictionary, output location, executor
    kind) happens before any worker starts.

    Args:
        job: Job parameters
        collector: Metrics collector to record into; a new one if omitted

    Returns:
        Metrics of the completed run
    """
    if job.executor not in EXECUTOR_KINDS:
        raise ValueError(f"Unknown executor kind '{job.executor}', expected one of {EXECUTOR_KINDS}")

    shards = discover_shards(job.input_dir)
    dictionary = get_dictionary(job.language_code, job.dictionary_dir)
    check_output_writable(job.input_dir, job.output_file)

    collector = collector or MetricsCollector()
    num_workers = job.max_workers or default_worker_count()
    run_id = collector.start_job(job.input_dir, shards, job.executor, num_workers)

    logger.info("Calculating ngrams...")
    collector.start_map_phase(run_id)
    ngrams = calculate_ngrams_parallel(
        job.input_dir, dictionary, max_workers=num_workers, executor=job.executor
    )
    collector.end_map_phase(run_id, ngrams)

    collector.start_write_phase(run_id)
    output_path = persist_to_file(ngrams, job.input_dir, job.output_file, job.threshold)
    collector.end_job(run_id, str(output_path))

    metrics = collector.get_metrics(run_id)
    logger.info(
        f"Run {run_id} completed in {metrics.total_time_seconds:.2f}s "
        f"({metrics.num_shards} shards, {metrics.throughput_mbps:.2f} MB/s)"
    )
    return metrics
