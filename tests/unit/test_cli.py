"""
Unit tests for the command line interface
"""

import gzip
import json
import os

import pytest

from wikifreq.client.cli import build_parser, main


@pytest.fixture
def shard_dir(temp_dir, shard_writer):
    dirpath = os.path.join(temp_dir, 'shards')
    os.makedirs(dirpath)
    shard_writer(dirpath, 'corpus.split.000.gz', ["the cat sat on the mat"] * 3, compress=True)
    shard_writer(dirpath, 'corpus.split.001.gz', ["a dog sat"] * 2, compress=True)
    return dirpath


class TestArgumentValidation:
    """Tests for argparse validation"""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "create-frequencies" in capsys.readouterr().out

    def test_unsupported_language_rejected(self, shard_dir):
        with pytest.raises(SystemExit) as excinfo:
            main(['create-frequencies', '-d', shard_dir, '-o', 'f.arpa', '-l', 'de'])
        assert excinfo.value.code == 2

    def test_missing_input_dir_rejected(self, temp_dir):
        with pytest.raises(SystemExit):
            main(['create-frequencies', '-d', os.path.join(temp_dir, 'x'), '-o', 'f.arpa', '-l', 'en'])

    @pytest.mark.parametrize("pieces", ["0", "1025", "many"])
    def test_pieces_bounds(self, temp_dir, shard_writer, pieces):
        dump = shard_writer(temp_dir, 'dump.json.gz', ['{"text": "cat"}'], compress=True)
        with pytest.raises(SystemExit):
            build_parser().parse_args(['split', '-p', dump, '-o', temp_dir, '-s', pieces])

    def test_defaults(self, temp_dir, shard_writer):
        freq = shard_writer(temp_dir, 'freq.arpa.gz', ["x"], compress=True)
        args = build_parser().parse_args(['top-k-words', '-f', freq, '-o', 'top.txt'])
        assert args.number_of_words == 10000
        assert args.minimum_word_length == 3

    @pytest.mark.parametrize("k", ["0", "100001"])
    def test_number_of_words_bounds(self, temp_dir, shard_writer, k):
        freq = shard_writer(temp_dir, 'freq.arpa.gz', ["x"], compress=True)
        with pytest.raises(SystemExit):
            build_parser().parse_args(['top-k-words', '-f', freq, '-o', 'top.txt', '-k', k])


class TestCreateFrequencies:
    """Tests for the create-frequencies command"""

    def test_writes_frequency_file_into_input_dir(self, shard_dir, dictionary_dir, frequency_reader):
        code = main([
            'create-frequencies', '-d', shard_dir, '-o', 'freq.arpa', '-l', 'en',
            '--dictionary-dir', dictionary_dir, '--workers', '2', '--executor', 'thread',
            '--min-articles', '2'
        ])

        assert code == 0
        text = frequency_reader(os.path.join(shard_dir, 'freq.arpa.gz'))
        assert text.startswith("\\data\\\ntotal unigrams = 24\n")
        assert "6\tthe\n" in text
        assert "3\tthe\tcat\n" in text
        assert "2\tdog\n" not in text

    def test_metrics_file(self, temp_dir, shard_dir, dictionary_dir):
        metrics_file = os.path.join(temp_dir, 'metrics.json')
        code = main([
            'create-frequencies', '-d', shard_dir, '-o', 'freq.arpa', '-l', 'en',
            '--dictionary-dir', dictionary_dir, '--executor', 'thread',
            '--metrics-file', metrics_file
        ])

        assert code == 0
        with open(metrics_file) as f:
            metrics = json.load(f)
        assert metrics['num_shards'] == 2
        assert metrics['total_unigrams'] == 24

    def test_missing_dictionary_fails_before_counting(self, temp_dir, shard_dir):
        code = main([
            'create-frequencies', '-d', shard_dir, '-o', 'freq.arpa', '-l', 'pl',
            '--dictionary-dir', os.path.join(temp_dir, 'nowhere')
        ])

        assert code == 1
        assert not os.path.exists(os.path.join(shard_dir, 'freq.arpa.gz'))

    def test_bad_output_location_fails_before_counting(self, shard_dir, dictionary_dir):
        code = main([
            'create-frequencies', '-d', shard_dir, '-o', 'missing/freq.arpa', '-l', 'en',
            '--dictionary-dir', dictionary_dir, '--executor', 'thread'
        ])
        assert code == 1

    def test_corrupt_shard_fails_without_output(self, shard_dir, dictionary_dir):
        with open(os.path.join(shard_dir, 'corpus.split.002.gz'), 'wb') as f:
            f.write(b"plain text, not gzip\n")

        code = main([
            'create-frequencies', '-d', shard_dir, '-o', 'freq.arpa', '-l', 'en',
            '--dictionary-dir', dictionary_dir, '--executor', 'thread'
        ])

        assert code == 1
        assert not os.path.exists(os.path.join(shard_dir, 'freq.arpa.gz'))


class TestSplitAndTopK:
    """Tests for the split and top-k-words commands"""

    def test_split_command(self, temp_dir):
        dump = os.path.join(temp_dir, 'dump.json.gz')
        with gzip.open(dump, 'wt', encoding='utf-8') as f:
            f.write('{"index": {}}\n{"text": "the cat"}\n')
        output_dir = os.path.join(temp_dir, 'shards')

        assert main(['split', '-p', dump, '-o', output_dir, '-s', '2']) == 0
        assert sorted(os.listdir(output_dir)) == ['dump.json.split.000.gz', 'dump.json.split.001.gz']

    def test_split_malformed_json_fails(self, temp_dir):
        dump = os.path.join(temp_dir, 'dump.json.gz')
        with gzip.open(dump, 'wt', encoding='utf-8') as f:
            f.write('{"text": \n')

        assert main(['split', '-p', dump, '-o', os.path.join(temp_dir, 'shards')]) == 1

    def test_top_k_words_command(self, temp_dir, shard_dir, dictionary_dir):
        main([
            'create-frequencies', '-d', shard_dir, '-o', 'freq.arpa', '-l', 'en',
            '--dictionary-dir', dictionary_dir, '--executor', 'thread', '--min-articles', '0'
        ])
        output = os.path.join(temp_dir, 'top.txt')

        code = main(['top-k-words', '-f', os.path.join(shard_dir, 'freq.arpa.gz'), '-o', output, '-k', '3'])

        assert code == 0
        with open(output) as f:
            assert f.read().splitlines() == ["the", "sat", "cat"]


class TestTruncatedInputs:
    """Tests for gzip inputs cut off before the end-of-stream marker"""

    def truncate(self, path):
        with open(path, 'rb') as f:
            data = f.read()
        with open(path, 'wb') as f:
            f.write(data[:len(data) // 2])

    def test_split_truncated_dump_fails(self, temp_dir):
        dump = os.path.join(temp_dir, 'dump.json.gz')
        with gzip.open(dump, 'wt', encoding='utf-8') as f:
            for i in range(200):
                f.write(json.dumps({"text": f"article number {i} about the cat"}) + "\n")
        self.truncate(dump)

        assert main(['split', '-p', dump, '-o', os.path.join(temp_dir, 'shards'), '-s', '2']) == 1

    def test_top_k_words_truncated_frequency_file_fails(self, temp_dir):
        freq = os.path.join(temp_dir, 'freq.arpa.gz')
        with gzip.open(freq, 'wt', encoding='utf-8') as f:
            f.write("\\data\\\ntotal unigrams = 400\nngram 1 = 200\nngram 2 = 0\n\n\\1-grams:\n")
            for i in range(200):
                f.write(f"{i + 1}\tword{i:04d}\n")
        # No section ends the 1-grams, so reading runs into the cut
        self.truncate(freq)

        code = main(['top-k-words', '-f', freq, '-o', os.path.join(temp_dir, 'top.txt')])

        assert code == 1
