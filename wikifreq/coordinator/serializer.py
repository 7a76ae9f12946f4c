"""
Serializer for merged n-gram counts.
Writes the thresholded frequency table as a gzip-compressed text file.
"""

import io
import os
import gzip
import logging
from pathlib import Path

from wikifreq.common.config import MINIMUM_ARTICLE_THRESHOLD
from wikifreq.common.results import NgramsResult

logger = logging.getLogger(__name__)


def gzip_output_path(output_dir, output_file) -> Path:
    """Join output_file onto output_dir and append .gz to its extension."""
    output_file_path = Path(output_file)
    return Path(output_dir) / output_file_path.with_name(output_file_path.name + '.gz')


def check_output_writable(output_dir, output_file):
    """
    Fail before any counting starts if the output file could not be created.

    Raises:
        FileNotFoundError: If the output file's directory doesn't exist
        PermissionError: If the directory is not writable
    """
    parent = gzip_output_path(output_dir, output_file).parent
    if not parent.is_dir():
        raise FileNotFoundError(f"Output directory not found: {parent}")
    if not os.access(parent, os.W_OK):
        raise PermissionError(f"Output directory is not writable: {parent}")


def passes_threshold(result: NgramsResult, token: str, threshold: int) -> bool:
    return result.article_count(token) > threshold


def write_frequencies(result: NgramsResult, out, threshold: int = MINIMUM_ARTICLE_THRESHOLD):
    """
    Write the frequency table to a text stream.

    Header counts report every entry in the tables. Only unigrams appearing in
    more than `threshold` articles are written, and only bigrams whose tokens
    both pass that test.
    """
    out.write("\\data\\\n")
    out.write(f"total unigrams = {result.total_unigrams}\n")
    out.write(f"ngram 1 = {len(result.unigram_counts)}\n")
    out.write(f"ngram 2 = {len(result.bigram_counts)}\n")
    out.write("\n")

    out.write("\\1-grams:\n")
    for token, count in result.sorted_unigrams():
        if passes_threshold(result, token, threshold):
            out.write(f"{count}\t{token}\n")
    out.write("\n")

    out.write("\\2-grams:\n")
    for (token1, token2), count in result.sorted_bigrams():
        if passes_threshold(result, token1, threshold) and passes_threshold(result, token2, threshold):
            out.write(f"{count}\t{token1}\t{token2}\n")
    out.write("\n")
    out.write("\\end\\\n")


def persist_to_file(result: NgramsResult, output_dir, output_file,
                    threshold: int = MINIMUM_ARTICLE_THRESHOLD) -> Path:
    """
    Write the frequency table to <output_dir>/<output_file>.gz

    The file is compressed at the highest level with output_file recorded as
    the original filename in the gzip header.

    Returns:
        Path of the written file

    Raises:
        OSError: If the output file cannot be created
    """
    gzip_output_filepath = gzip_output_path(output_dir, output_file)
    logger.info(f"Writing frequencies to {gzip_output_filepath}")

    with open(gzip_output_filepath, 'wb') as raw:
        with gzip.GzipFile(filename=os.path.basename(str(output_file)), mode='wb',
                           compresslevel=9, fileobj=raw, mtime=0) as compressed:
            with io.TextIOWrapper(compressed, encoding='utf-8', newline='\n') as out:
                write_frequencies(result, out, threshold)

    return gzip_output_filepath
