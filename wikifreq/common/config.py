"""
Configuration for wikifreq jobs.
Module level defaults come from the environment; the CLI overrides them per run.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

# Configuration from environment
DICTIONARY_DIR = os.getenv('WIKIFREQ_DICTIONARY_DIR', 'dictionaries')
MINIMUM_ARTICLE_THRESHOLD = int(os.getenv('WIKIFREQ_MIN_ARTICLES', 40))
EXECUTOR_KIND = os.getenv('WIKIFREQ_EXECUTOR', 'process')
LOG_LEVEL = os.getenv('WIKIFREQ_LOG_LEVEL', 'INFO')

# If a word is not in the dictionary it is replaced by this. It never occurs
# in the corpus itself because punctuation is trimmed from both ends of tokens.
OUT_OF_VOCABULARY_WORD = "<unk>"

# Only files whose stem contains this marker are treated as corpus shards.
SHARD_MARKER = "split"

SUPPORTED_LANGUAGES = ("en", "pl")
EXECUTOR_KINDS = ("process", "thread")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = LOG_LEVEL):
    """Configure root logging once for a command line run."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT
    )


@dataclass
class FrequencyJob:
    """Parameters of a single create-frequencies run"""
    input_dir: str
    output_file: str
    language_code: str
    threshold: int = MINIMUM_ARTICLE_THRESHOLD
    max_workers: Optional[int] = None
    executor: str = EXECUTOR_KIND
    dictionary_dir: str = DICTIONARY_DIR
