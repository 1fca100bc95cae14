#!/usr/bin/env python3
"""
Scoring Module - deterministic assessment scoring.

Public API:
- AIScorer: runs all analyzers and computes the weighted composite
- AIScoreRecord: scores for one assessment
- resolve_weights: per-job percentage weight overrides normalised to sum 1

Analyzers live in focused modules:

- readability.py: grade-level formulas
- writing_quality.py: grammar, structure, vocabulary, coherence
- seo.py: headings, keywords, links, meta-like content, length
- english_proficiency.py: fluency, accuracy, vocabulary, complexity
- ai_detection.py: perplexity, burstiness, stylometry (higher = more human)
"""

from core.scorer.models import AIScoreRecord, AnalyzerResult, DIMENSIONS, SCORER_VERSION
from core.scorer.service import AIScorer, DEFAULT_WEIGHTS, DEFAULT_WEIGHT_PERCENTAGES, resolve_weights

__all__ = [
    'AIScorer',
    'AIScoreRecord',
    'AnalyzerResult',
    'DIMENSIONS',
    'DEFAULT_WEIGHTS',
    'DEFAULT_WEIGHT_PERCENTAGES',
    'SCORER_VERSION',
    'resolve_weights',
]
