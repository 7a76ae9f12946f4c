"""
Corpus splitter.
Splits a gzip-compressed CirrusSearch JSON dump into pseudo-random shards of
NFKC-normalized article text, one article per line.
"""

import os
import gzip
import json
import random
import shutil
import logging
import unicodedata
from contextlib import ExitStack
from pathlib import Path

from wikifreq.common.config import SHARD_MARKER

logger = logging.getLogger(__name__)

SPLIT_SEED = 42
PROGRESS_INTERVAL = 10000


def shard_name(basename: str, index: int) -> str:
    """Uncompressed name of shard `index`, e.g. enwiki.split.003"""
    return f"{basename}.{SHARD_MARKER}.{index:03d}"


def handle_split(input_path, output_dir, pieces: int) -> int:
    """
    Split a dump into `pieces` gzip shards.

    The output directory is deleted if it exists. Articles are assigned to
    shards by a generator seeded with SPLIT_SEED so the split is reproducible.
    Lines without a "text" field are skipped.

    Args:
        input_path: Path to a gzip JSON-lines dump
        output_dir: Directory for shard files, recreated from scratch
        pieces: Number of shards

    Returns:
        Number of articles written
    """
    if pieces < 1:
        raise ValueError("Pieces cannot be 0.")

    input_path = Path(input_path)
    output_dir = Path(output_dir)
    if output_dir.is_dir():
        logger.info(f"Deleting output directory {output_dir}")
        shutil.rmtree(output_dir)
    os.makedirs(output_dir)

    basename = input_path.stem
    rng = random.Random(SPLIT_SEED)
    articles = 0

    with ExitStack() as stack:
        output_files = []
        for i in range(pieces):
            name = shard_name(basename, i)
            raw = stack.enter_context(open(output_dir / f"{name}.gz", 'wb'))
            output_files.append(stack.enter_context(
                gzip.GzipFile(filename=name, mode='wb', compresslevel=9, fileobj=raw, mtime=0)
            ))

        with gzip.open(input_path, 'rt', encoding='utf-8') as reader:
            for line in reader:
                record = json.loads(line)
                text = record.get('text')
                if text is None:
                    continue
                text = unicodedata.normalize('NFKC', text)
                output_file = output_files[rng.randrange(pieces)]
                output_file.write(text.encode('utf-8'))
                output_file.write(b"\n")

                articles += 1
                if articles % PROGRESS_INTERVAL == 0:
                    logger.info(f"Split {articles} articles")

    logger.info(f"Split {articles} articles into {pieces} shards in {output_dir}")
    return articles
