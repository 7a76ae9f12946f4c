"""
Performance metrics collection for create-frequencies runs.
"""

import os
import time
import json
import uuid
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import psutil


@dataclass
class JobMetrics:
    """Metrics for a single create-frequencies run."""

    run_id: str
    input_dir: str
    executor: str
    num_workers: int
    num_shards: int
    input_size_bytes: int
    start_time: float
    end_time: float = 0.0
    map_phase_start: float = 0.0
    map_phase_end: float = 0.0
    write_phase_start: float = 0.0
    write_phase_end: float = 0.0
    output_size_bytes: int = 0
    total_unigrams: int = 0
    unigram_entries: int = 0
    bigram_entries: int = 0
    peak_memory_bytes: int = 0

    @property
    def total_time_seconds(self) -> float:
        """Total run time in seconds."""
        return self.end_time - self.start_time

    @property
    def map_phase_time_seconds(self) -> float:
        """Counting and merging time in seconds."""
        return self.map_phase_end - self.map_phase_start

    @property
    def write_phase_time_seconds(self) -> float:
        """Serialization time in seconds."""
        return self.write_phase_end - self.write_phase_start

    @property
    def throughput_mbps(self) -> float:
        """Input megabytes counted per second of map phase."""
        elapsed = self.map_phase_time_seconds
        if elapsed <= 0:
            return 0.0
        return (self.input_size_bytes / (1024 * 1024)) / elapsed

    def to_dict(self) -> dict:
        """Convert metrics to dictionary, including derived timings."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['map_phase_time_seconds'] = self.map_phase_time_seconds
        data['write_phase_time_seconds'] = self.write_phase_time_seconds
        data['throughput_mbps'] = self.throughput_mbps
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


class MetricsCollector:
    """Collects metrics for the phases of create-frequencies runs."""

    def __init__(self):
        self.job_metrics: Dict[str, JobMetrics] = {}
        self.process = psutil.Process()

    def _sample_memory(self, run_id: str):
        rss = self.process.memory_info().rss
        metrics = self.job_metrics[run_id]
        metrics.peak_memory_bytes = max(metrics.peak_memory_bytes, rss)

    def start_job(self, input_dir: str, shards: List[str], executor: str,
                  num_workers: int) -> str:
        """Initialize metrics tracking for a new run and return its id."""
        run_id = str(uuid.uuid4())
        input_size = sum(os.path.getsize(s) for s in shards if os.path.exists(s))

        self.job_metrics[run_id] = JobMetrics(
            run_id=run_id,
            input_dir=str(input_dir),
            executor=executor,
            num_workers=num_workers,
            num_shards=len(shards),
            input_size_bytes=input_size,
            start_time=time.time()
        )
        self._sample_memory(run_id)
        return run_id

    def start_map_phase(self, run_id: str):
        """Mark the start of counting."""
        self.job_metrics[run_id].map_phase_start = time.time()

    def end_map_phase(self, run_id: str, result):
        """Mark the end of counting and merging and record table sizes."""
        metrics = self.job_metrics[run_id]
        metrics.map_phase_end = time.time()
        metrics.total_unigrams = result.total_unigrams
        metrics.unigram_entries = len(result.unigram_counts)
        metrics.bigram_entries = len(result.bigram_counts)
        self._sample_memory(run_id)

    def start_write_phase(self, run_id: str):
        """Mark the start of serialization."""
        self.job_metrics[run_id].write_phase_start = time.time()

    def end_job(self, run_id: str, output_path: str):
        """Mark run completion and record output size."""
        metrics = self.job_metrics[run_id]
        metrics.write_phase_end = time.time()
        metrics.end_time = time.time()
        if os.path.exists(output_path):
            metrics.output_size_bytes = os.path.getsize(output_path)
        self._sample_memory(run_id)

    def get_metrics(self, run_id: str) -> Optional[JobMetrics]:
        """Retrieve metrics for a specific run."""
        return self.job_metrics.get(run_id)
