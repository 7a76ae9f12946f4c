"""
Frequency selector.
Extracts the most frequent words from a frequency file.
"""

import logging
from typing import List, Tuple

from wikifreq.common.config import OUT_OF_VOCABULARY_WORD
from wikifreq.common.line_reader import read_lines

logger = logging.getLogger(__name__)

UNIGRAMS_MARKER = "\\1-grams:"


def load_sorted_onegrams(input_file) -> List[Tuple[str, int]]:
    """
    Read the 1-gram section of a frequency file.

    Returns:
        (word, count) pairs, most frequent first. Equal counts keep their
        order from the file. The OOV token is left out.
    """
    result = []
    loading_onegrams = False
    for line in read_lines(input_file):
        if line.startswith(UNIGRAMS_MARKER):
            loading_onegrams = True
            continue
        if not loading_onegrams:
            continue
        if not line.rstrip():
            break

        elems = line.split("\t")
        count = int(elems[0])
        token = elems[1].rstrip()
        if token == OUT_OF_VOCABULARY_WORD:
            continue
        result.append((token, count))

    result.sort(key=lambda pair: pair[1], reverse=True)
    return result


def handle_top_k_words(input_file, output_file, minimum_word_length: int,
                       number_of_words: int) -> List[str]:
    """
    Write the top `number_of_words` words to output_file, one per line.

    Words shorter than minimum_word_length UTF-8 bytes are skipped.

    Returns:
        The words written
    """
    onegrams = load_sorted_onegrams(input_file)
    top_onegrams = [
        word for word, _count in onegrams
        if len(word.encode('utf-8')) >= minimum_word_length
    ][:number_of_words]

    with open(output_file, 'w', encoding='utf-8') as f:
        for word in top_onegrams:
            f.write(word + "\n")

    logger.info(f"Wrote {len(top_onegrams)} words to {output_file}")
    return top_onegrams
