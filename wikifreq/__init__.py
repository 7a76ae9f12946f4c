"""
wikifreq: unigram/bigram frequency tables from sharded text corpora.
"""

__version__ = "0.1.0"
