#!/usr/bin/env python3
"""
English Proficiency - fluency, grammar accuracy, vocabulary and sentence
complexity, with checks for common second-language error patterns.
"""

import re
from collections import Counter
from typing import List, Dict, Any

from core.scorer.models import AnalyzerResult
from core.scorer import text_stats

FLOW_WORDS = [
    'however', 'therefore', 'moreover', 'furthermore', 'nevertheless',
    'consequently', 'meanwhile', 'similarly', 'in addition', 'for example',
    'in contrast', 'on the other hand', 'as a result', 'in fact',
]

UNNATURAL_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in (
        r'\bmake a research\b',
        r'\binformations\b',
        r'\bequipments\b',
        r'\badvices\b',
        r'\bvery much\s+(?:like|want)\b',
        r'\bmore better\b',
        r'\bmost best\b',
    )
]

# (pattern, weight)
GRAMMAR_ERRORS = [
    (re.compile(r'\ba\s+(?:hour|honest|honor)\b', re.IGNORECASE), 3),
    (re.compile(r'\ban\s+(?:university|user|uniform)\b', re.IGNORECASE), 3),
    (re.compile(r'\bdepend of\b', re.IGNORECASE), 4),
    (re.compile(r'\binterested for\b', re.IGNORECASE), 4),
    (re.compile(r'\bmarried with\b', re.IGNORECASE), 3),
    (re.compile(r'\bI am agree\b', re.IGNORECASE), 5),
    (re.compile(r'\bI am understand\b', re.IGNORECASE), 5),
    (re.compile(r'\bI am knowing\b', re.IGNORECASE), 4),
    (re.compile(r'\bevery day life\b', re.IGNORECASE), 3),
]

SUBJECT_VERB_ERRORS = [
    re.compile(r'\b(?:he|she|it)\s+(?:are|were|have|do)\b', re.IGNORECASE),
    re.compile(r'\b(?:they|we|you)\s+(?:is|was|has|does)\b', re.IGNORECASE),
    re.compile(r'\bI\s+(?:are|is|has)\b'),
]

ADVANCED_WORDS = [
    'analyze', 'synthesize', 'comprehensive', 'substantial', 'significant',
    'innovative', 'strategic', 'facilitate', 'implement', 'optimize',
    'collaborate', 'demonstrate', 'establish', 'maintain', 'enhance',
    'contribute', 'participate', 'investigate', 'determine', 'evaluate',
]

SIMPLE_WORDS = ['good', 'bad', 'big', 'small', 'nice', 'very', 'really', 'things']

WORD_FORM_ERRORS = [
    re.compile(p, re.IGNORECASE) for p in (
        r'\bmore easy\b', r'\bmore good\b', r'\bmore bad\b',
        r'\bchilds\b', r'\bmans\b', r'\bwomans\b', r'\bpeoples\b',
    )
]

_CLAUSE_SPLIT = re.compile(
    r',|;|:|\s+(?:and|but|or|because|although|if|when|while|since|as|that|which|who)\s+',
    re.IGNORECASE
)

COMPLEX_STRUCTURES = [
    re.compile(r'\b(?:having|having been|being|been)\s+\w+ed\b', re.IGNORECASE),
    re.compile(r'\b(?:not only|neither|either)\b.*\b(?:but also|nor|or)\b', re.IGNORECASE),
    re.compile(r'\b(?:despite|although|whereas|nevertheless)\b', re.IGNORECASE),
    re.compile(r'\b(?:which|who|whom|whose|that)\b', re.IGNORECASE),
]


def fluency_score(text: str) -> int:
    sentence_list = text_stats.sentences(text)
    words = text_stats.whitespace_words(text)
    if not sentence_list or not words:
        return 0

    score = 80
    per_sentence = len(words) / len(sentence_list)
    if 10 <= per_sentence <= 25:
        score += 10
    elif per_sentence < 5 or per_sentence > 35:
        score -= 15

    flow = text_stats.count_phrases(text.lower(), FLOW_WORDS)
    if flow:
        score += min(10, flow * 2)

    starters = Counter(text_stats.sentence_starters(sentence_list))
    if any(count > 3 for count in starters.values()):
        score -= 15

    for pattern in UNNATURAL_PATTERNS:
        score -= len(pattern.findall(text)) * 5

    return text_stats.clamp_score(score)


def grammar_accuracy_score(text: str) -> int:
    score = 85

    weighted = sum(len(pattern.findall(text)) * weight for pattern, weight in GRAMMAR_ERRORS)
    score -= min(40, weighted)

    for pattern in SUBJECT_VERB_ERRORS:
        score -= len(pattern.findall(text)) * 3

    return text_stats.clamp_score(score)


def vocabulary_usage_score(text: str) -> int:
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
    elif richness < 0.4:
        score -= 10

    advanced = text_stats.count_phrases(text.lower(), ADVANCED_WORDS)
    if advanced > 3:
        score += 15
    elif advanced > 1:
        score += 10
    elif advanced > 0:
        score += 5

    counts = Counter(tokens)
    if sum(counts[w] for w in SIMPLE_WORDS) > len(tokens) / 50:
        score -= 10

    for pattern in WORD_FORM_ERRORS:
        score -= len(pattern.findall(text)) * 4

    return text_stats.clamp_score(score)


def _sentence_complexity(sentence: str) -> int:
    words = sentence.split()
    clauses = len(_CLAUSE_SPLIT.split(sentence))

    complexity = 0
    if len(words) > 20:
        complexity += 3
    elif len(words) > 15:
        complexity += 2
    elif len(words) > 10:
        complexity += 1
    elif len(words) < 5:
        complexity -= 1

    if clauses > 3:
        complexity += 2
    elif clauses > 2:
        complexity += 1

    for pattern in COMPLEX_STRUCTURES:
        complexity += len(pattern.findall(sentence))

    return complexity


def sentence_complexity_score(text: str) -> int:
    sentence_list = text_stats.sentences(text)
    if not sentence_list:
        return 0

    score = 70
    per_sentence = [_sentence_complexity(s) for s in sentence_list]
    avg = text_stats.mean(per_sentence)

    if 1.5 <= avg <= 3:
        score += 15
    elif 1 <= avg <= 4:
        score += 10
    elif avg < 0.5:
        score -= 15
    elif avg > 5:
        score -= 10

    complex_ratio = sum(1 for c in per_sentence if c > 3) / len(sentence_list)
    if 0.2 <= complex_ratio <= 0.6:
        score += 10
    elif complex_ratio > 0.8:
        score -= 5

    return text_stats.clamp_score(score)


def language_confidence(score: int) -> str:
    if score >= 90:
        return 'native'
    if score >= 80:
        return 'advanced'
    if score >= 65:
        return 'intermediate'
    return 'beginner'


def find_issues(text: str) -> List[Dict[str, Any]]:
    issues = []
    checks = [
        (r'\ba\s+hour\b', 'Article usage: should be "an hour"', 'medium'),
        (r'\bmake a research\b', 'Collocation error: should be "do research" or "conduct research"', 'high'),
        (r'\binformations\b', 'Countability error: "information" is uncountable', 'high'),
    ]
    for pattern, message, severity in checks:
        examples = [m.group(0).strip() for m in re.finditer(pattern, text, re.IGNORECASE)]
        if examples:
            issues.append({'type': 'grammar', 'message': message, 'severity': severity, 'examples': examples})

    word_order = [m.group(0) for m in re.finditer(r'\ball of them are\b', text, re.IGNORECASE)]
    if word_order:
        issues.append({
            'type': 'word-order',
            'message': 'Unnatural word order detected',
            'severity': 'medium',
            'examples': word_order,
        })

    return issues


class EnglishProficiencyAnalyzer:
    """Estimates command of written English."""

    def analyze(self, text: str) -> AnalyzerResult:
        if not text or not text.strip():
            return AnalyzerResult(score=0, feedback=['No content to analyze'], details={
                'fluency_score': 0,
                'grammar_accuracy_score': 0,
                'vocabulary_usage_score': 0,
                'sentence_complexity_score': 0,
                'language_confidence': 'beginner',
                'issues': [],
            })

        fluency = fluency_score(text)
        grammar = grammar_accuracy_score(text)
        vocabulary = vocabulary_usage_score(text)
        complexity = sentence_complexity_score(text)
        score = text_stats.clamp_score((fluency + grammar + vocabulary + complexity) / 4)

        return AnalyzerResult(
            score=score,
            feedback=self._feedback(fluency, grammar, vocabulary, complexity),
            details={
                'fluency_score': fluency,
                'grammar_accuracy_score': grammar,
                'vocabulary_usage_score': vocabulary,
                'sentence_complexity_score': complexity,
                'language_confidence': language_confidence(score),
                'issues': find_issues(text),
            },
        )

    @staticmethod
    def _feedback(fluency, grammar, vocabulary, complexity) -> List[str]:
        bands = [
            (fluency, ('Excellent fluency and natural expression', 'Good fluency with minor issues',
                       'Adequate fluency, some improvement needed', 'Fluency needs significant improvement')),
            (grammar, ('Strong grammatical accuracy', 'Good grammar with minor errors',
                       'Acceptable grammar, focus on common errors', 'Grammar needs substantial work')),
            (vocabulary, ('Rich and appropriate vocabulary usage', 'Good vocabulary range',
                          'Adequate vocabulary, could be expanded', 'Limited vocabulary range')),
            (complexity, ('Excellent sentence complexity and variety', 'Good sentence structure variety',
                          'Adequate complexity, add more variety', 'Sentences are too simple or too complex')),
        ]
        feedback = []
        for value, (excellent, good, adequate, poor) in bands:
            if value >= 85:
                feedback.append(excellent)
            elif value >= 75:
                feedback.append(good)
            elif value >= 65:
                feedback.append(adequate)
            else:
                feedback.append(poor)
        return feedback
