#!/usr/bin/env python3
"""
Generate synthetic shard files for benchmarking create-frequencies.
"""

import os
import gzip
import random
import argparse
import logging
import sys
from pathlib import Path

from wikifreq.common.config import configure_logging
from wikifreq.common.vocabulary import trim_token
from wikifreq.corpus.split import shard_name

logger = logging.getLogger(__name__)

# Extra tokens mixed into articles so the OOV path is exercised
NOISE_WORDS = ["Xyzzy", "qwerty", "1234", "--", "foo-bar"]


def load_words(vocabulary_file):
    words = []
    with open(vocabulary_file, 'r', encoding='utf-8') as f:
        for line in f:
            if line.startswith('#'):
                continue
            word = trim_token(line)
            if word:
                words.append(word)
    if not words:
        raise ValueError(f"Vocabulary file is empty: {vocabulary_file}")
    return words


def generate_shards(output_dir, words, num_shards: int, articles_per_shard: int,
                    words_per_article: int = 200, seed: int = 42):
    """
    Write gzip shards of random articles.

    Word choice follows a Zipf-like distribution over `words` so the frequency
    table has a realistic long tail.

    Returns:
        List of shard paths written
    """
    output_dir = Path(output_dir)
    os.makedirs(output_dir, exist_ok=True)
    rng = random.Random(seed)
    population = words + NOISE_WORDS
    weights = [1.0 / (rank + 1) for rank in range(len(population))]

    paths = []
    for i in range(num_shards):
        path = output_dir / f"{shard_name('synthetic', i)}.gz"
        with gzip.open(path, 'wt', encoding='utf-8') as f:
            for _ in range(articles_per_shard):
                length = rng.randint(1, words_per_article * 2)
                tokens = rng.choices(population, weights=weights, k=length)
                f.write(" ".join(tokens) + ".\n")
        paths.append(str(path))
        logger.info(f"Generated {path.name} ({path.stat().st_size / (1024 * 1024):.2f} MB)")
    return paths


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate synthetic shards for benchmarks')
    parser.add_argument('--vocabulary-file', required=True, help='Word list, one word per line')
    parser.add_argument('--output-dir', default='benchmark_inputs', help='Directory for shard files')
    parser.add_argument('--shards', type=int, default=12, help='Number of shards (default: 12)')
    parser.add_argument('--articles', type=int, default=1000, help='Articles per shard (default: 1000)')
    parser.add_argument('--seed', type=int, default=42)
    args = parser.parse_args(argv)

    configure_logging()
    words = load_words(args.vocabulary_file)
    generate_shards(args.output_dir, words, args.shards, args.articles, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
