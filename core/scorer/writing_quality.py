#!/usr/bin/env python3
"""
Writing Quality - grammar, structure, vocabulary and coherence heuristics.

The overall score is the plain mean of the four component scores.
"""

import re
from collections import Counter
from typing import List, Dict, Any

from core.scorer.models import AnalyzerResult
from core.scorer import text_stats

GRAMMAR_PATTERNS = [
    (re.compile(r'[.]{2,}'), 'multiple periods'),
    (re.compile(r'[!]{2,}'), 'multiple exclamation marks'),
    (re.compile(r'[?]{2,}'), 'multiple question marks'),
    (re.compile(r'\b(alot|aswell|irregardless|could of|should of|would of)\b', re.IGNORECASE), 'common misspellings'),
    (re.compile(r'\b(\w+)\s+\1\b', re.IGNORECASE), 'repeated words'),
]

TRANSITION_WORDS = [
    'however', 'therefore', 'furthermore', 'moreover', 'consequently',
    'meanwhile', 'similarly', 'in contrast', 'on the other hand',
    'for example', 'in addition', 'as a result', 'in conclusion',
]

INTRO_WORDS = ['introduction', 'first', 'begin', 'start', 'today', 'this article']
CONCLUSION_WORDS = ['conclusion', 'finally', 'in summary', 'to conclude', 'overall']

SOPHISTICATED_WORDS = [
    'analyze', 'synthesize', 'comprehensive', 'innovative', 'strategic',
    'collaborate', 'facilitate', 'optimize', 'leverage', 'implement',
    'substantial', 'significant', 'efficient', 'effective', 'dynamic',
]

WEAK_WORDS = ['very', 'really', 'quite', 'pretty', 'just', 'maybe', 'perhaps']

COMMON_WORDS = {
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of',
    'with', 'by', 'is', 'are', 'was', 'were', 'be', 'been', 'have', 'has', 'had',
    'do', 'does', 'did', 'will', 'would', 'could', 'should', 'may', 'might',
    'must', 'can',
}

FLOW_INDICATORS = [
    'first', 'second', 'third', 'next', 'then', 'finally',
    'before', 'after', 'during', 'while', 'meanwhile',
    'because', 'since', 'therefore', 'thus', 'consequently',
    'although', 'however', 'nevertheless', 'despite',
]

OVERUSE_EXEMPT = {
    'that', 'with', 'this', 'they', 'have', 'will', 'from', 'been', 'more',
    'some', 'like', 'what', 'time', 'very', 'when', 'much', 'would', 'there',
    'could', 'other',
}

PASSIVE_PATTERNS = [
    re.compile(r'\b(was|were|is|are|am|be|been|being)\s+\w+ed\b', re.IGNORECASE),
    re.compile(r'\b(was|were|is|are|am|be|been|being)\s+\w+en\b', re.IGNORECASE),
]


def _clamp(value: float) -> int:
    return text_stats.clamp_score(value)


def grammar_score(text: str) -> int:
    score = 100

    for pattern, _ in GRAMMAR_PATTERNS:
        score -= len(pattern.findall(text)) * 2

    sentence_list = text_stats.sentences(text)
    fragments = sum(1 for s in sentence_list if len(s.split()) < 3)
    run_ons = sum(1 for s in sentence_list if len(s.split()) > 40)

    score -= fragments * 3
    score -= run_ons * 5
    return _clamp(score)


def structure_score(text: str) -> int:
    sentence_list = text_stats.sentences(text)
    if not sentence_list:
        return 0

    score = 80
    words = text_stats.whitespace_words(text)
    paragraph_list = text_stats.paragraphs(text)

    lengths = [len(s.split()) for s in sentence_list]
    avg_length = text_stats.mean(lengths)
    if 15 < avg_length < 25:
        score += 5
    if text_stats.variance(lengths) > 20:
        score += 10

    if len(paragraph_list) > 1:
        score += 10
        avg_paragraph = text_stats.mean([len(p.split()) for p in paragraph_list])
        if 30 < avg_paragraph < 150:
            score += 5

    lower = text.lower()
    if text_stats.count_phrases(lower, TRANSITION_WORDS) > len(words) / 200:
        score += 5

    if len(text) > 500 and paragraph_list:
        first = paragraph_list[0].lower()
        last = paragraph_list[-1].lower()
        if any(word in first for word in INTRO_WORDS):
            score += 5
        if any(word in last for word in CONCLUSION_WORDS):
            score += 5

    return _clamp(score)


def vocabulary_score(text: str) -> int:
    tokens = text_stats.word_tokens(text)
    if not tokens:
        return 0

    score = 75
    richness = len(set(tokens)) / len(tokens)
    if richness > 0.7:
        score += 15
    elif richness > 0.6:
        score += 10
    elif richness > 0.5:
        score += 5

    lower = text.lower()
    sophisticated = text_stats.count_phrases(lower, SOPHISTICATED_WORDS)
    if sophisticated:
        score += min(10, sophisticated * 2)

    counts = Counter(tokens)
    weak = sum(counts[word] for word in WEAK_WORDS)
    if weak > len(tokens) / 100:
        score -= min(15, weak)

    overused = [w for w, c in counts.items() if w not in COMMON_WORDS and len(w) > 3 and c > 5]
    if overused:
        score -= min(10, len(overused) * 2)

    return _clamp(score)


def coherence_score(text: str) -> int:
    sentence_list = text_stats.sentences(text)
    if not sentence_list:
        return 0

    score = 80
    lower = text.lower()

    if text_stats.count_phrases(lower, FLOW_INDICATORS) > len(sentence_list) / 10:
        score += 10

    # Reward key terms that recur across the whole text
    tokens = text_stats.word_tokens(text, min_length=5)
    for word in text_stats.top_words(tokens, 5):
        positions = [m.start() / len(text) for m in re.finditer(re.escape(word), lower)]
        if len(positions) > 1 and max(positions) - min(positions) > 0.5:
            score += 2

    return _clamp(score)


def find_issues(text: str) -> List[Dict[str, Any]]:
    issues = []

    for pattern in PASSIVE_PATTERNS:
        matches = pattern.findall(text)
        if len(matches) > 3:
            issues.append({
                'type': 'style',
                'message': f'Frequent passive voice usage ({len(matches)} instances)',
                'severity': 'medium',
                'suggestion': 'Consider using more active voice constructions',
            })
            break

    paragraph_list = text_stats.paragraphs(text)
    if len(paragraph_list) == 1 and len(text) > 300:
        issues.append({
            'type': 'structure',
            'message': 'Consider breaking long content into multiple paragraphs',
            'severity': 'medium',
        })

    short = [p for p in paragraph_list if len(p.split()) < 20]
    if paragraph_list and len(short) > len(paragraph_list) / 2:
        issues.append({
            'type': 'structure',
            'message': 'Many paragraphs are quite short - consider expanding ideas',
            'severity': 'low',
        })

    counts = Counter(text_stats.word_tokens(text, min_length=4))
    overused = [(w, c) for w, c in counts.most_common() if c > 4 and w not in OVERUSE_EXEMPT]
    if overused:
        word, count = overused[0]
        issues.append({
            'type': 'vocabulary',
            'message': f'Word "{word}" appears {count} times - consider using synonyms',
            'severity': 'medium' if count > 6 else 'low',
        })

    return issues


class WritingQualityAnalyzer:
    """Scores mechanics and organisation of a piece of writing."""

    def analyze(self, text: str) -> AnalyzerResult:
        if not text or not text.strip():
            return AnalyzerResult(
                score=0,
                feedback=['No content to analyze'],
                details={
                    'grammar_score': 0,
                    'structure_score': 0,
                    'vocabulary_score': 0,
                    'coherence_score': 0,
                    'issues': [],
                },
            )

        grammar = grammar_score(text)
        structure = structure_score(text)
        vocabulary = vocabulary_score(text)
        coherence = coherence_score(text)
        issues = find_issues(text)

        return AnalyzerResult(
            score=_clamp((grammar + structure + vocabulary + coherence) / 4),
            feedback=self._feedback(grammar, structure, vocabulary, coherence, issues),
            details={
                'grammar_score': grammar,
                'structure_score': structure,
                'vocabulary_score': vocabulary,
                'coherence_score': coherence,
                'issues': issues,
            },
        )

    @staticmethod
    def _feedback(grammar, structure, vocabulary, coherence, issues) -> List[str]:
        feedback = []

        if grammar >= 90:
            feedback.append('Excellent grammar and mechanics')
        elif grammar >= 80:
            feedback.append('Good grammar with minor issues')
        elif grammar >= 70:
            feedback.append('Adequate grammar, some improvement needed')
        else:
            feedback.append('Grammar needs significant improvement')

        if structure >= 90:
            feedback.append('Well-structured and organized content')
        elif structure >= 80:
            feedback.append('Good structure with clear flow')
        elif structure >= 70:
            feedback.append('Adequate structure, could be improved')
        else:
            feedback.append('Structure needs significant improvement')

        if vocabulary >= 90:
            feedback.append('Rich and varied vocabulary')
        elif vocabulary >= 80:
            feedback.append('Good vocabulary usage')
        elif vocabulary >= 70:
            feedback.append('Adequate vocabulary, consider expanding')
        else:
            feedback.append('Vocabulary could be more varied and sophisticated')

        if coherence >= 90:
            feedback.append('Excellent coherence and flow')
        elif coherence >= 80:
            feedback.append('Good logical flow')
        elif coherence >= 70:
            feedback.append('Generally coherent with some gaps')
        else:
            feedback.append('Coherence and logical flow need improvement')

        if any(issue['severity'] == 'high' for issue in issues):
            feedback.append('Address critical writing issues identified')

        return feedback
