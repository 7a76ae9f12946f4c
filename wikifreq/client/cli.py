#!/usr/bin/env python3
"""
wikifreq CLI
Word frequency counter for Wikipedia dataset dumps: split a dump into shards,
create a frequency file from the shards, and select the top K words.
"""

import argparse
import logging
import os
import sys

from wikifreq.common.config import (
    DICTIONARY_DIR, EXECUTOR_KIND, EXECUTOR_KINDS, LOG_LEVEL,
    MINIMUM_ARTICLE_THRESHOLD, SUPPORTED_LANGUAGES, FrequencyJob, configure_logging
)
from wikifreq.common.vocabulary import UnsupportedLanguageError
from wikifreq.coordinator.frequencies import handle_create_frequencies
from wikifreq.coordinator.scheduler import ShardProcessingError
from wikifreq.corpus.split import handle_split
from wikifreq.corpus.top_k_words import handle_top_k_words

logger = logging.getLogger(__name__)


def _bounded_int(name: str, minimum: int, maximum: int = None):
    def parse(value):
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{name} is not a valid integer.")
        if number < minimum:
            raise argparse.ArgumentTypeError(f"{name} cannot be less than {minimum}.")
        if maximum is not None and number > maximum:
            raise argparse.ArgumentTypeError(f"{name} too large, must be at most {maximum}.")
        return number
    return parse


def existing_file(value):
    if not os.path.isfile(value):
        raise argparse.ArgumentTypeError("Input filepath does not exist or isn't a file.")
    return value


def existing_dir(value):
    if not os.path.isdir(value):
        raise argparse.ArgumentTypeError("Input path doesn't exist or isn't a directory.")
    return value


def split(args):
    """Split a CirrusSearch dump into shards"""
    try:
        handle_split(args.input_path, args.output_dir, args.pieces)
        return 0
    except (OSError, EOFError, ValueError) as e:
        logger.error(f"Split failed: {e}")
        return 1


def create_frequencies(args):
    """Create a frequency file from a directory of shards"""
    job = FrequencyJob(
        input_dir=args.input_dir,
        output_file=args.output_file,
        language_code=args.language,
        threshold=args.min_articles,
        max_workers=args.workers,
        executor=args.executor,
        dictionary_dir=args.dictionary_dir
    )
    try:
        metrics = handle_create_frequencies(job)
    except UnsupportedLanguageError as e:
        logger.error(str(e))
        return 1
    except ShardProcessingError as e:
        logger.error(f"Aborting, no frequency file written: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"create-frequencies failed: {e}")
        return 1

    if args.metrics_file:
        metrics.save_to_file(args.metrics_file)
        logger.info(f"Saved metrics to {args.metrics_file}")
    return 0


def top_k_words(args):
    """Write the most frequent words of a frequency file"""
    try:
        handle_top_k_words(
            args.input_file, args.output_file,
            args.minimum_word_length, args.number_of_words
        )
        return 0
    except (OSError, EOFError, ValueError, IndexError) as e:
        logger.error(f"top-k-words failed: {e}")
        return 1


def build_parser():
    parser = argparse.ArgumentParser(
        description='Word frequency counter using Wikipedia dataset dumps.',
        epilog='Example: %(prog)s create-frequencies -d shards/ -o enwiki.arpa -l en'
    )
    parser.add_argument('--log-level', default=LOG_LEVEL, help=f'Logging level (default: {LOG_LEVEL})')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # split command
    split_parser = subparsers.add_parser(
        'split',
        help='Split a cirrussearch JSON GZ file into pieces',
        description='Split a cirrussearch JSON GZ file into pieces'
    )
    split_parser.add_argument(
        '-p', '--input-path', required=True, type=existing_file, metavar='FILE',
        help='Path to cirrussearch JSON GZ file, download from https://dumps.wikimedia.org/other/cirrussearch/'
    )
    split_parser.add_argument(
        '-o', '--output-dir', required=True, metavar='DIR',
        help='Output directory for split files. Will be deleted if exists.'
    )
    split_parser.add_argument(
        '-s', '--pieces', type=_bounded_int('Pieces', 1, 1024), default=12,
        metavar='POSITIVE INTEGER', help='How many pieces to split the input file into (default: 12)'
    )
    split_parser.set_defaults(func=split)

    # create-frequencies command
    frequencies_parser = subparsers.add_parser(
        'create-frequencies',
        help='Create a frequencies file from line-delimited files of articles',
        description='Create a frequencies file from line-delimited files of articles'
    )
    frequencies_parser.add_argument(
        '-d', '--input-dir', required=True, type=existing_dir, metavar='DIR',
        help='Directory full of line-delimited GZ files. The output file is written here.'
    )
    frequencies_parser.add_argument(
        '-o', '--output-file', required=True, metavar='FILE',
        help='Name of output frequencies file. Will be GZIP compressed and have .gz appended.'
    )
    frequencies_parser.add_argument(
        '-l', '--language', required=True, choices=SUPPORTED_LANGUAGES, metavar='ISO 639-1 CODE',
        help=f'Two-character language code for dictionary, one of {list(SUPPORTED_LANGUAGES)}'
    )
    frequencies_parser.add_argument(
        '--min-articles', type=_bounded_int('Minimum articles', 0), default=MINIMUM_ARTICLE_THRESHOLD,
        help=f'Words must appear in more than this many articles (default: {MINIMUM_ARTICLE_THRESHOLD})'
    )
    frequencies_parser.add_argument(
        '--workers', type=_bounded_int('Workers', 1), default=None,
        help='Number of worker tasks (default: CPU count - 1)'
    )
    frequencies_parser.add_argument(
        '--executor', choices=EXECUTOR_KINDS, default=EXECUTOR_KIND,
        help=f'Run workers as processes or threads (default: {EXECUTOR_KIND})'
    )
    frequencies_parser.add_argument(
        '--dictionary-dir', default=DICTIONARY_DIR,
        help=f'Directory holding <language>.txt dictionaries (default: {DICTIONARY_DIR})'
    )
    frequencies_parser.add_argument('--metrics-file', help='Write run metrics as JSON to this file')
    frequencies_parser.set_defaults(func=create_frequencies)

    # top-k-words command
    top_k_parser = subparsers.add_parser(
        'top-k-words',
        help='Create a file with the top K words (unigrams) in a frequencies file',
        description='Create a file with the top K words (unigrams) in a frequencies file'
    )
    top_k_parser.add_argument(
        '-f', '--input-file', required=True, type=existing_file, metavar='FILE',
        help="GZIP-compressed frequencies file as produced by the 'create-frequencies' sub-command"
    )
    top_k_parser.add_argument(
        '-o', '--output-file', required=True, metavar='FILE',
        help='Name of output file to put top K words. Will not be compressed.'
    )
    top_k_parser.add_argument(
        '-k', '--number-of-words', type=_bounded_int('Number of words', 1, 100000), default=10000,
        metavar='POSITIVE INTEGER', help='Number of words to return, starting with most frequent (default: 10000)'
    )
    top_k_parser.add_argument(
        '-m', '--minimum-word-length', type=_bounded_int('Minimum word length', 1), default=3,
        metavar='POSITIVE INTEGER', help='Minimum (inclusive) length of word to consider (default: 3)'
    )
    top_k_parser.set_defaults(func=top_k_words)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    configure_logging(args.log_level)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
