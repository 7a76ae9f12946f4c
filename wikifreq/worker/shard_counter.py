"""
Shard Counter
Tokenizes one shard file, one article per line, and counts its unigrams,
bigrams and per-article unigram occurrences.
"""

import re
import time
import logging
from typing import AbstractSet, List

from wikifreq.common.config import OUT_OF_VOCABULARY_WORD
from wikifreq.common.line_reader import read_lines
from wikifreq.common.results import NgramsResult
from wikifreq.common.vocabulary import trim_token

logger = logging.getLogger(__name__)

# Unicode White_Space only; str.split() would also break on \x1c-\x1f
WHITESPACE = re.compile(r'[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+')


def tokenize_line(line: str, vocabulary: AbstractSet[str]) -> List[str]:
    """
    Split an article into tokens, replacing unknown words with the OOV token.

    Args:
        line: One article of normalized text
        vocabulary: Set of known tokens

    Returns:
        List of tokens, each either in the vocabulary or OUT_OF_VOCABULARY_WORD
    """
    tokens = []
    for raw in WHITESPACE.split(line):
        if not raw:
            continue
        token = trim_token(raw)
        tokens.append(token if token in vocabulary else OUT_OF_VOCABULARY_WORD)
    return tokens


def count_tokens(tokens: List[str], result: NgramsResult):
    """Add the counts of one article's tokens to result."""
    unigram_counts = result.unigram_counts
    bigram_counts = result.bigram_counts

    for token1, token2 in zip(tokens, tokens[1:]):
        result.total_unigrams += 1
        unigram_counts[token1] += 1
        bigram_counts[(token1, token2)] += 1

    # The pairs above never visit the last token as a unigram, so it is added
    # here. A line with a single token adds no unigram at all.
    if len(tokens) >= 2:
        result.total_unigrams += 1
        unigram_counts[tokens[-1]] += 1

    for token in set(tokens):
        result.unigram_article_counts[token] += 1


def count_shard(input_file, vocabulary: AbstractSet[str]) -> NgramsResult:
    """
    Count n-grams in a single shard file.

    Args:
        input_file: Path to a shard, gzip-compressed if it ends in .gz
        vocabulary: Set of known tokens, read but never modified

    Returns:
        NgramsResult with this shard's counts only

    Raises:
        OSError: If the file cannot be opened or read
    """
    start_time = time.time()
    result = NgramsResult()
    articles = 0

    for line in read_lines(input_file):
        count_tokens(tokenize_line(line, vocabulary), result)
        articles += 1

    execution_time = int((time.time() - start_time) * 1000)
    logger.debug(
        f"Counted {input_file}: {articles} articles, {result.total_unigrams} unigrams, "
        f"{len(result.bigram_counts)} distinct bigrams in {execution_time}ms"
    )
    return result
