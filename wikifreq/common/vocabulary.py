"""
Vocabulary source: the fixed set of known word forms for a language.
"""

import os
import string
import logging
import unicodedata
from typing import FrozenSet, Optional

from wikifreq.common.config import DICTIONARY_DIR, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

# ASCII punctuation plus whitespace, trimmed from both ends of every token
TRIM_CHARACTERS = string.punctuation + string.whitespace


class UnsupportedLanguageError(ValueError):
    """Raised when no dictionary exists for a language code"""

    def __init__(self, language_code: str):
        super().__init__(f"No dictionary available for language {language_code}")
        self.language_code = language_code


def trim_token(token: str) -> str:
    """Strip leading and trailing ASCII punctuation and whitespace."""
    return token.strip(TRIM_CHARACTERS)


def dictionary_path(language_code: str, dictionary_dir: Optional[str] = None) -> str:
    if language_code not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(language_code)
    return os.path.join(dictionary_dir or DICTIONARY_DIR, f"{language_code}.txt")


def get_dictionary(language_code: str, dictionary_dir: Optional[str] = None) -> FrozenSet[str]:
    """
    Load the vocabulary for a language.

    Each line of the dictionary file is NFKC-normalized and trimmed of
    punctuation; comment lines starting with '#' and blank lines are dropped.

    Args:
        language_code: Two-letter ISO 639-1 code, one of SUPPORTED_LANGUAGES
        dictionary_dir: Directory holding <code>.txt files

    Returns:
        Immutable set of valid tokens

    Raises:
        UnsupportedLanguageError: If the language code is not supported
        FileNotFoundError: If the dictionary file does not exist
    """
    path = dictionary_path(language_code, dictionary_dir)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    words = set()
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = unicodedata.normalize('NFKC', line)
            if line.startswith('#'):
                continue
            word = trim_token(line)
            if word:
                words.add(word)

    logger.info(f"Loaded {len(words)} words for language '{language_code}' from {path}")
    return frozenset(words)
