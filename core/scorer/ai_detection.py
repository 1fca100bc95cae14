#!/usr/bin/env python3
"""
AI Detection - likelihood that a text was written by a human.

Higher scores mean more human-like. Five signals are blended:
perplexity (25%), burstiness (20%), vocabulary diversity (20%),
sentence variation (20%) and stylometry (15%).
"""

import math
import re
from collections import Counter
from typing import List, Dict, Any, Sequence

from core.scorer.models import AnalyzerResult
from core.scorer import text_stats

SIGNAL_WEIGHTS = {
    'perplexity_score': 0.25,
    'burstiness_score': 0.20,
    'vocabulary_diversity': 0.20,
    'sentence_variation': 0.20,
    'stylometry_score': 0.15,
}

AI_FILLER_WORDS = [
    'furthermore', 'moreover', 'additionally', 'consequently',
    'therefore', 'indeed', 'certainly', 'undoubtedly',
    'comprehensive', 'innovative', 'cutting-edge', 'state-of-the-art',
]

AI_SENTENCE_OPENERS = [
    re.compile(r'^(in conclusion|to summarize|in summary|overall|ultimately),?\s+', re.IGNORECASE),
    re.compile(r'^(it is important to note|it should be noted|it is worth mentioning),?\s+', re.IGNORECASE),
    re.compile(r'^(furthermore|moreover|additionally|in addition),?\s+', re.IGNORECASE),
]

AI_PHRASES = [
    'it is important to note that',
    "in today's digital landscape",
    'cutting-edge technology',
    'comprehensive solution',
    'in conclusion, it can be said',
]

FUNCTION_WORDS = {
    'the', 'of', 'to', 'and', 'a', 'in', 'is', 'it', 'you', 'that',
    'he', 'was', 'for', 'on', 'are', 'as', 'with', 'his', 'they',
    'i', 'at', 'be', 'this', 'have', 'from', 'or', 'one', 'had',
    'by', 'word', 'but', 'not', 'what', 'all', 'were', 'we', 'when',
}

PERSONAL_EXPRESSIONS = [
    re.compile(r'\b(I think|I believe|in my opinion|personally|honestly)\b', re.IGNORECASE),
    re.compile(r'\b(amazing|fantastic|terrible|awful|love|hate)\b', re.IGNORECASE),
    re.compile(r'(?<!!)!{1,2}(?!!)'),
    re.compile(r'(?<!\?)\?(?!\?)'),
]

COLLOQUIAL_PATTERNS = [
    re.compile(r'\b(ugh|hmm|wow|oh|ah)\b', re.IGNORECASE),
    re.compile(r'\b(totally|literally|basically|honestly)\b', re.IGNORECASE),
    re.compile(r'\.{2,5}(?!\.)'),
    re.compile(r'[!?]{2,3}'),
]


def _bigram_surprises(tokens: Sequence[str]) -> List[float]:
    """-log2 P(next | current) under a bigram model fitted on the text itself."""
    unigrams = Counter(tokens)
    bigrams = Counter(zip(tokens, tokens[1:]))
    surprises = []
    for current, following in zip(tokens, tokens[1:]):
        probability = max(1, bigrams[(current, following)]) / unigrams[current]
        surprises.append(-math.log2(max(probability, 0.001)))
    return surprises


def perplexity_score(text: str) -> float:
    tokens = text_stats.word_tokens(text)
    if len(tokens) < 2:
        return 50.0

    surprises = _bigram_surprises(tokens)
    score = min(100.0, text_stats.mean(surprises) * 10)

    # Very even predictability across the text reads as machine-generated
    if text_stats.variance(surprises) < 0.5:
        score -= 20

    return float(max(0.0, min(100.0, score)))


def _length_patterns(lengths: Sequence[int]) -> Dict[str, bool]:
    if len(lengths) < 4:
        return {'is_repeating': False, 'is_too_uniform': False}

    is_repeating = False
    for pattern_len in range(2, len(lengths) // 2 + 1):
        pattern = list(lengths[:pattern_len])
        matches = sum(
            1 for i in range(pattern_len, len(lengths), pattern_len)
            if list(lengths[i:i + pattern_len]) == pattern
        )
        if matches >= 2:
            is_repeating = True
            break

    return {'is_repeating': is_repeating, 'is_too_uniform': text_stats.variance(lengths) < 4}


def burstiness_score(text: str) -> float:
    sentence_list = text_stats.sentences(text)
    if len(sentence_list) < 3:
        return 50.0

    lengths = [len(s.split()) for s in sentence_list]
    avg = text_stats.mean(lengths)
    std_dev = math.sqrt(text_stats.variance(lengths))

    burstiness = (std_dev - avg) / (std_dev + avg) if (std_dev + avg) > 0 else 0.0
    score = max(0.0, burstiness) * 100

    patterns = _length_patterns(lengths)
    if patterns['is_repeating']:
        score -= 30
    if patterns['is_too_uniform']:
        score -= 20

    return float(max(0.0, min(100.0, score + 50)))


def vocabulary_diversity(text: str) -> float:
    tokens = text_stats.word_tokens(text, min_length=3)
    if len(tokens) < 10:
        return 50.0

    score = len(set(tokens)) / len(tokens) * 100

    if text_stats.count_phrases(text.lower(), AI_FILLER_WORDS) > 3:
        score -= 20

    if text_stats.variance(list(Counter(tokens).values())) < 1:
        score -= 15

    return float(max(0.0, min(100.0, score)))


def _structure_of(sentence: str) -> str:
    trimmed = sentence.strip().lower()
    if '?' in trimmed:
        return 'question'
    if '!' in trimmed:
        return 'exclamation'
    if ',' in trimmed and ' and ' in trimmed:
        return 'compound_complex'
    if ',' in trimmed:
        return 'complex'
    if ' and ' in trimmed or ' but ' in trimmed or ' or ' in trimmed:
        return 'compound'
    words = trimmed.split()
    if len(words) > 20:
        return 'long_simple'
    if len(words) < 5:
        return 'short_simple'
    return 'simple'


def sentence_variation(text: str) -> float:
    sentence_list = text_stats.sentences(text)
    if len(sentence_list) < 3:
        return 50.0

    score = 70.0

    starter_variety = len(set(text_stats.sentence_starters(sentence_list))) / len(sentence_list)
    if starter_variety > 0.7:
        score += 15
    elif starter_variety < 0.3:
        score -= 20

    structures = [_structure_of(s) for s in sentence_list]
    structure_variety = len(set(structures)) / len(structures)
    if structure_variety > 0.6:
        score += 15
    elif structure_variety < 0.4:
        score -= 15

    ai_openers = sum(
        1 for s in sentence_list
        if any(pattern.search(s.strip()) for pattern in AI_SENTENCE_OPENERS)
    )
    if ai_openers > len(sentence_list) * 0.3:
        score -= 25

    return float(max(0.0, min(100.0, score)))


def stylometry_score(text: str) -> float:
    words = re.findall(r'\b\w+\b', text)
    if not words or not text_stats.sentences(text):
        return 50.0

    score = 60.0

    function_ratio = sum(1 for w in words if w.lower() in FUNCTION_WORDS) / len(words)
    if 0.35 <= function_ratio <= 0.65:
        score += 15
    else:
        score -= 10

    punctuation_ratio = len(re.findall(r'[,.;:!?-]', text)) / len(words)
    if 0.08 <= punctuation_ratio <= 0.25:
        score += 10
    elif punctuation_ratio > 0.3:
        score -= 15

    personality = sum(len(pattern.findall(text)) for pattern in PERSONAL_EXPRESSIONS)
    if personality:
        score += min(15, personality * 3)

    return float(max(0.0, min(100.0, score)))


def find_indicators(text: str, signals: Dict[str, float]) -> List[Dict[str, Any]]:
    indicators = []

    perplexity = signals['perplexity_score']
    if perplexity > 80:
        indicators.append({'type': 'human', 'feature': 'High perplexity', 'confidence': 0.8,
                           'description': 'Unpredictable word choices suggest human creativity'})
    elif perplexity < 30:
        indicators.append({'type': 'ai', 'feature': 'Low perplexity', 'confidence': 0.7,
                           'description': 'Very predictable word patterns suggest AI generation'})

    burstiness = signals['burstiness_score']
    if burstiness > 75:
        indicators.append({'type': 'human', 'feature': 'High burstiness', 'confidence': 0.7,
                           'description': 'Varied sentence lengths indicate natural human writing'})
    elif burstiness < 25:
        indicators.append({'type': 'ai', 'feature': 'Low burstiness', 'confidence': 0.6,
                           'description': 'Uniform sentence patterns suggest AI generation'})

    lower = text.lower()
    for phrase in AI_PHRASES:
        if phrase in lower:
            indicators.append({'type': 'ai', 'feature': 'AI-typical phrasing', 'confidence': 0.6,
                               'description': f'Contains phrase commonly used by AI: "{phrase}"'})

    if any(pattern.search(text) for pattern in COLLOQUIAL_PATTERNS):
        indicators.append({'type': 'human', 'feature': 'Colloquial expressions', 'confidence': 0.5,
                           'description': 'Contains informal expressions typical of human writing'})

    return indicators


def detection_confidence(indicators: List[Dict[str, Any]]) -> str:
    strong = sum(1 for i in indicators if i['confidence'] > 0.7)
    if strong >= 2:
        return 'high'
    if strong >= 1 or len(indicators) >= 3:
        return 'medium'
    return 'low'


class AIDetectionAnalyzer:
    """Heuristic human-vs-machine authorship score (100 = clearly human)."""

    def analyze(self, text: str) -> AnalyzerResult:
        if not text or not text.strip():
            return AnalyzerResult(score=0, feedback=['No content to analyze'], details={
                'human_likelihood': 0.0,
                'ai_likelihood': 1.0,
                'confidence': 'low',
                'analysis': {name: 0.0 for name in SIGNAL_WEIGHTS},
                'indicators': [],
            })

        signals = {
            'perplexity_score': perplexity_score(text),
            'burstiness_score': burstiness_score(text),
            'vocabulary_diversity': vocabulary_diversity(text),
            'sentence_variation': sentence_variation(text),
            'stylometry_score': stylometry_score(text),
        }
        score = text_stats.clamp_score(sum(signals[name] * w for name, w in SIGNAL_WEIGHTS.items()))
        indicators = find_indicators(text, signals)

        return AnalyzerResult(
            score=score,
            feedback=self._feedback(score, indicators),
            details={
                'human_likelihood': score / 100,
                'ai_likelihood': round(1 - score / 100, 2),
                'confidence': detection_confidence(indicators),
                'analysis': {name: round(value, 2) for name, value in signals.items()},
                'indicators': indicators,
            },
        )

    @staticmethod
    def _feedback(score: int, indicators: List[Dict[str, Any]]) -> List[str]:
        if score >= 80:
            feedback = ['Strong indicators of human authorship']
        elif score >= 60:
            feedback = ['Likely human-written with some AI characteristics']
        elif score >= 40:
            feedback = ['Mixed indicators - could be human or AI']
        else:
            feedback = ['Strong indicators suggest possible AI generation']

        ai_count = sum(1 for i in indicators if i['type'] == 'ai')
        human_count = sum(1 for i in indicators if i['type'] == 'human')
        if human_count > ai_count:
            feedback.append('More human-like characteristics detected')
        elif ai_count > human_count:
            feedback.append('More AI-like patterns detected')

        return feedback
