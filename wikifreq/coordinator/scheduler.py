"""
Parallel map scheduler.
Discovers shard files, counts each one on a bounded worker pool and folds the
partial results as they complete.
"""

import os
import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import AbstractSet, List, Optional

import psutil

from wikifreq.common.config import EXECUTOR_KIND, EXECUTOR_KINDS, SHARD_MARKER
from wikifreq.common.results import NgramsResult
from wikifreq.coordinator.reducer import NgramsReducer
from wikifreq.worker.shard_counter import count_shard

logger = logging.getLogger(__name__)

# Vocabulary installed in each worker process by the pool initializer
_worker_vocabulary: Optional[AbstractSet[str]] = None


class ShardProcessingError(RuntimeError):
    """Raised when counting a shard fails; the whole job is aborted"""

    def __init__(self, shard: str, cause: BaseException):
        super().__init__(f"Failed to determine n-gram counts for file {shard}: {cause}")
        self.shard = shard


def default_worker_count() -> int:
    """One less than the number of CPUs, leaving a core for the merging thread."""
    return max((psutil.cpu_count() or 1) - 1, 1)


def discover_shards(input_dir) -> List[str]:
    """
    List shard files in a directory.

    Args:
        input_dir: Directory containing shard files and possibly other files

    Returns:
        Sorted paths of regular files whose stem contains SHARD_MARKER

    Raises:
        FileNotFoundError: If the directory doesn't exist
        NotADirectoryError: If the path is not a directory
    """
    input_dir = Path(input_dir)
    if not input_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not input_dir.is_dir():
        raise NotADirectoryError(f"Input path is not a directory: {input_dir}")

    shards = [
        str(path) for path in input_dir.iterdir()
        if path.is_file() and SHARD_MARKER in path.stem
    ]
    return sorted(shards)


def _init_worker(vocabulary: AbstractSet[str]):
    global _worker_vocabulary
    _worker_vocabulary = vocabulary


def _count_shard_in_worker(input_file: str) -> NgramsResult:
    return count_shard(input_file, _worker_vocabulary)


def _create_executor(kind: str, max_workers: int, vocabulary: AbstractSet[str]):
    if kind == 'process':
        executor = ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=_init_worker,
            initargs=(vocabulary,)
        )
        return executor, _count_shard_in_worker
    if kind == 'thread':
        executor = ThreadPoolExecutor(max_workers=max_workers)
        return executor, lambda input_file: count_shard(input_file, vocabulary)
    raise ValueError(f"Unknown executor kind '{kind}', expected one of {EXECUTOR_KINDS}")


def calculate_ngrams_parallel(input_dir, vocabulary: AbstractSet[str],
                              max_workers: Optional[int] = None,
                              executor: str = EXECUTOR_KIND) -> NgramsResult:
    """
    Count n-grams over every shard in a directory and merge the results.

    Each shard is counted by exactly one task. Results are merged in the order
    tasks complete. The first failing task cancels everything still pending
    and aborts the run.

    Args:
        input_dir: Directory of shard files
        vocabulary: Set of known tokens, shared read-only by every task
        max_workers: Pool size; defaults to default_worker_count()
        executor: 'process' or 'thread'

    Returns:
        Corpus-wide NgramsResult

    Raises:
        ShardProcessingError: If any shard fails to be counted
    """
    shards = discover_shards(input_dir)
    max_workers = max_workers or default_worker_count()
    logger.info(f"Found {len(shards)} shards in {input_dir}, counting with {max_workers} {executor} workers")

    reducer = NgramsReducer()
    if not shards:
        return reducer.result()

    pool, task = _create_executor(executor, max_workers, vocabulary)
    try:
        futures = {pool.submit(task, shard): shard for shard in shards}
        for future in as_completed(futures):
            shard = futures[future]
            try:
                partial = future.result()
            except Exception as e:
                logger.error(f"Shard {shard} failed: {e}")
                pool.shutdown(wait=True, cancel_futures=True)
                raise ShardProcessingError(shard, e) from e

            reducer.add(partial)
            logger.info(
                f"Completed shard {os.path.basename(shard)} "
                f"({reducer.partials_merged}/{len(shards)})"
            )
    finally:
        pool.shutdown(wait=True)

    return reducer.result()
