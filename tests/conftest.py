"""
Pytest configuration and shared fixtures
"""

import gzip
import os
import shutil
import tempfile

import pytest

SAMPLE_VOCABULARY = frozenset(["the", "cat", "sat", "on", "mat", "dog", "a"])


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def vocabulary():
    """Small vocabulary shared by counting tests"""
    return SAMPLE_VOCABULARY


@pytest.fixture
def sample_articles():
    """Articles, one per line, mixing known and unknown words"""
    return [
        "The cat sat on the mat.",
        "the dog sat on a mat",
        "a cat, a dog, and the cat!",
        "",
        "cat",
        "zebra the cat sat",
    ]


def write_shard(directory, name, lines, compress=False):
    """Write lines to a shard file, gzip-compressed if requested"""
    path = os.path.join(directory, name)
    data = "".join(line + "\n" for line in lines)
    if compress:
        with gzip.open(path, 'wt', encoding='utf-8') as f:
            f.write(data)
    else:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(data)
    return path


@pytest.fixture
def shard_writer():
    """Expose write_shard to tests"""
    return write_shard


@pytest.fixture
def dictionary_dir(temp_dir):
    """Dictionary directory with an English word list"""
    dirpath = os.path.join(temp_dir, 'dictionaries')
    os.makedirs(dirpath)
    with open(os.path.join(dirpath, 'en.txt'), 'w', encoding='utf-8') as f:
        f.write("# English test dictionary\n")
        for word in sorted(SAMPLE_VOCABULARY):
            f.write(word + "\n")
    return dirpath


def read_frequency_file(path):
    """Decompress a frequency file to text"""
    with gzip.open(path, 'rt', encoding='utf-8') as f:
        return f.read()


@pytest.fixture
def frequency_reader():
    """Expose read_frequency_file to tests"""
    return read_frequency_file
