"""
Reducer for per-shard n-gram results.
Folds partial results into one corpus-wide result by point-wise addition.
"""

import logging
from typing import Iterable

from wikifreq.common.results import NgramsResult

logger = logging.getLogger(__name__)


class NgramsReducer:
    """Incrementally folds partial results as they arrive"""

    def __init__(self):
        self._result = NgramsResult()
        self.partials_merged = 0

    def add(self, partial: NgramsResult):
        """
        Fold one partial result into the running total.

        Addition over the union of keys is associative and commutative, so the
        order partials arrive in does not change the final result.
        """
        self._result.update(partial)
        self.partials_merged += 1

    def result(self) -> NgramsResult:
        logger.info(
            f"Merged {self.partials_merged} partial results: "
            f"{self._result.total_unigrams} unigrams, "
            f"{len(self._result.unigram_counts)} distinct unigrams, "
            f"{len(self._result.bigram_counts)} distinct bigrams"
        )
        return self._result


def merge_ngrams_results(results: Iterable[NgramsResult]) -> NgramsResult:
    """Merge any number of partial results into a new NgramsResult."""
    reducer = NgramsReducer()
    for partial in results:
        reducer.add(partial)
    return reducer.result()
