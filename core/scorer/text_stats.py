"""
Text statistics shared by the analyzers.

Counts that end up in a denominator are floored at 1 so empty or tiny
inputs never divide by zero.
"""

import math
import re
from collections import Counter
from typing import List, Sequence

import numpy as np

_SENTENCE_SPLIT = re.compile(r'[.!?]+')
_PARAGRAPH_SPLIT = re.compile(r'\n\s*\n')
_WORD = re.compile(r'\b\w+\b')
_VOWEL_GROUPS = re.compile(r'[aeiouy]+')
_NON_ALPHA = re.compile(r'[^a-z]')
_TAG = re.compile(r'<[^>]*>')


def clamp_score(value: float) -> int:
    """Round half up and clamp to [0, 100]."""
    if value != value:  # NaN
        return 0
    return max(0, min(100, int(math.floor(value + 0.5))))


def round1(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def paragraphs(text: str) -> List[str]:
    return [p for p in _PARAGRAPH_SPLIT.split(text) if p.strip()]


def whitespace_words(text: str) -> List[str]:
    return text.split()


def word_tokens(text: str, min_length: int = 1) -> List[str]:
    """Lower-cased ``\\w+`` tokens of at least ``min_length`` characters."""
    return [w for w in _WORD.findall(text.lower()) if len(w) >= min_length]


def strip_tags(text: str) -> str:
    return _TAG.sub('', text)


def sentence_count(text: str) -> int:
    return max(1, len(sentences(text)))


def word_count(text: str) -> int:
    return max(1, len(whitespace_words(text)))


def syllables_in_word(word: str) -> int:
    clean = _NON_ALPHA.sub('', word.lower())
    if not clean:
        return 0
    count = len(_VOWEL_GROUPS.findall(clean)) or 1
    if clean.endswith('e'):
        count -= 1
    return max(1, count)


def syllable_count(text: str) -> int:
    return sum(syllables_in_word(w) for w in whitespace_words(text))


def complex_word_count(text: str) -> int:
    """Words of three or more syllables, ignoring inflected forms."""
    total = 0
    for word in whitespace_words(text.lower()):
        clean = _NON_ALPHA.sub('', word)
        if not clean or re.search(r'(ed|ing|es|s)$', clean):
            continue
        if syllables_in_word(clean) >= 3:
            total += 1
    return total


def variance(values: Sequence[float]) -> float:
    """Population variance; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float)))


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=float)))


def top_words(tokens: Sequence[str], n: int) -> List[str]:
    """Most frequent tokens; ties keep first-seen order so results are stable."""
    return [word for word, _ in Counter(tokens).most_common(n)]


def sentence_starters(sentence_list: Sequence[str]) -> List[str]:
    starters = []
    for sentence in sentence_list:
        parts = sentence.strip().lower().split()
        if parts:
            starters.append(parts[0])
    return starters


def count_phrases(lower_text: str, phrases: Sequence[str]) -> int:
    """How many of ``phrases`` occur at least once."""
    return sum(1 for phrase in phrases if phrase in lower_text)
