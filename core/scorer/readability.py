#!/usr/bin/env python3
"""
Readability - classic grade-level formulas combined into a 0-100 score.

Computes Flesch-Kincaid grade, Flesch reading ease, Gunning fog, SMOG,
ARI and Coleman-Liau, averages the five grade levels, and scores the
average against a target band of grade 8-12 for general web content.
"""

import math
import re

from core.scorer.models import AnalyzerResult
from core.scorer import text_stats


def _empty_result() -> AnalyzerResult:
    return AnalyzerResult(
        score=0,
        feedback=['No content to analyze'],
        details={
            'grade_level': 0,
            'reading_ease': 0,
            'flesch_kincaid_grade': 0,
            'flesch_reading_ease': 0,
            'gunning_fog_index': 0,
            'smog_index': 0,
            'automated_readability_index': 0,
            'coleman_liau_index': 0,
            'metrics': {
                'sentences': 0,
                'words': 0,
                'syllables': 0,
                'avg_sentence_length': 0,
                'avg_syllables_per_word': 0,
            },
        },
    )


def _grade_band_score(average_grade: float) -> int:
    if average_grade < 6:
        return 70  # Too simple
    if average_grade <= 8:
        return 85
    if average_grade <= 12:
        return 95
    if average_grade <= 16:
        return 80  # Academic but acceptable
    return 60


def _reading_ease_adjustment(reading_ease: float) -> int:
    if reading_ease >= 90:
        return 5
    if reading_ease >= 80:
        return 3
    if reading_ease >= 70:
        return 1
    if reading_ease < 30:
        return -10
    return 0


class ReadabilityAnalyzer:
    """Scores how easy a text is to read for a general audience."""

    def analyze(self, text: str) -> AnalyzerResult:
        if not text or not text.strip():
            return _empty_result()

        sentences = text_stats.sentence_count(text)
        words = text_stats.word_count(text)
        syllables = max(1, text_stats.syllable_count(text))
        complex_words = text_stats.complex_word_count(text)
        chars = len(re.sub(r'\s', '', text))

        words_per_sentence = words / sentences
        syllables_per_word = syllables / words

        flesch_kincaid_grade = 0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59
        flesch_reading_ease = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
        gunning_fog = 0.4 * (words_per_sentence + 100 * (complex_words / words))
        smog = 1.0430 * math.sqrt(complex_words * (30 / sentences)) + 3.1291
        ari = 4.71 * (chars / words) + 0.5 * words_per_sentence - 21.43

        letters_per_100 = (chars / words) * 100
        sentences_per_100 = (sentences / words) * 100
        coleman_liau = 0.0588 * letters_per_100 - 0.296 * sentences_per_100 - 15.8

        average_grade = (flesch_kincaid_grade + gunning_fog + smog + ari + coleman_liau) / 5

        score = _grade_band_score(average_grade) + _reading_ease_adjustment(flesch_reading_ease)

        return AnalyzerResult(
            score=text_stats.clamp_score(score),
            feedback=self._feedback(flesch_reading_ease, average_grade, words_per_sentence),
            details={
                'grade_level': text_stats.round1(average_grade),
                'reading_ease': text_stats.round1(flesch_reading_ease),
                'flesch_kincaid_grade': text_stats.round1(flesch_kincaid_grade),
                'flesch_reading_ease': text_stats.round1(flesch_reading_ease),
                'gunning_fog_index': text_stats.round1(gunning_fog),
                'smog_index': text_stats.round1(smog),
                'automated_readability_index': text_stats.round1(ari),
                'coleman_liau_index': text_stats.round1(coleman_liau),
                'metrics': {
                    'sentences': sentences,
                    'words': words,
                    'syllables': syllables,
                    'avg_sentence_length': text_stats.round1(words_per_sentence),
                    'avg_syllables_per_word': text_stats.round1(syllables_per_word),
                },
            },
        )

    @staticmethod
    def _feedback(reading_ease: float, grade_level: float, words_per_sentence: float):
        feedback = []

        if reading_ease >= 90:
            feedback.append('Excellent readability - very easy to understand')
        elif reading_ease >= 80:
            feedback.append('Good readability - easy to read')
        elif reading_ease >= 70:
            feedback.append('Fair readability - fairly easy to read')
        elif reading_ease >= 60:
            feedback.append('Acceptable readability - standard difficulty')
        elif reading_ease >= 50:
            feedback.append('Difficult to read - consider simplifying')
        else:
            feedback.append('Very difficult to read - needs significant simplification')

        if grade_level <= 8:
            feedback.append('Appropriate for general audiences')
        elif grade_level <= 12:
            feedback.append('Good for educated general audience')
        elif grade_level <= 16:
            feedback.append('Academic level - may be too complex for general audience')
        else:
            feedback.append('Graduate level - likely too complex for most readers')

        if words_per_sentence > 25:
            feedback.append('Consider shortening sentences for better readability')
        elif words_per_sentence > 20:
            feedback.append('Sentence length is good but could be more varied')
        else:
            feedback.append('Good sentence length variety')

        return feedback
