"""
N-gram count tables produced per shard and merged across the corpus.
"""

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class NgramsResult:
    """
    Unigram and bigram counts for a shard, or for the whole corpus once merged.

    Attributes:
        total_unigrams: Total number of unigrams counted. The probability of a
            unigram is its count divided by this.
        unigram_counts: Occurrences of each token. A token occurring more than
            once in an article is counted once per occurrence.
        unigram_article_counts: Number of articles each token appears in. A
            token occurring more than once in an article adds 1 only.
        bigram_counts: Occurrences of each (token, next token) pair. The
            probability of (w1, w2) is this count divided by the count of w1.
    """
    total_unigrams: int = 0
    unigram_counts: Counter = field(default_factory=Counter)
    unigram_article_counts: Counter = field(default_factory=Counter)
    bigram_counts: Counter = field(default_factory=Counter)

    def update(self, other: 'NgramsResult') -> 'NgramsResult':
        """Add another result's counts into this one in place."""
        self.total_unigrams += other.total_unigrams
        self.unigram_counts.update(other.unigram_counts)
        self.unigram_article_counts.update(other.unigram_article_counts)
        self.bigram_counts.update(other.bigram_counts)
        return self

    def merge(self, other: 'NgramsResult') -> 'NgramsResult':
        """Return a new result holding the point-wise sum of both operands."""
        return NgramsResult().update(self).update(other)

    def sorted_unigrams(self):
        """Unigram (token, count) pairs in ascending token order"""
        return sorted(self.unigram_counts.items())

    def sorted_bigrams(self):
        """Bigram ((token1, token2), count) pairs in ascending pair order"""
        return sorted(self.bigram_counts.items())

    def article_count(self, token: str) -> float:
        """
        Number of articles a token appears in.
        A token with no article count is treated as appearing in infinitely many.
        """
        if token in self.unigram_article_counts:
            return self.unigram_article_counts[token]
        return float('inf')
