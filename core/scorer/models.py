#!/usr/bin/env python3
"""
Scoring Models - Data structures for assessment scoring results.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict

# Bump when any analyzer heuristic or the composite formula changes;
# cached results are only valid for the version that produced them.
SCORER_VERSION = "2.1.0"

DIMENSIONS = (
    'readability',
    'writing_quality',
    'seo',
    'english_proficiency',
    'ai_detection',
)


@dataclass
class AnalyzerResult:
    """Output of a single analyzer: a 0-100 score, feedback lines and details."""
    score: int
    feedback: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    def to_feedback_dict(self) -> Dict[str, Any]:
        return {'score': self.score, 'feedback': list(self.feedback), **self.details}


@dataclass
class AIScoreRecord:
    """Scores for one assessment. All scores are in [0, 100]."""
    readability_score: int
    writing_quality_score: int
    seo_score: int
    english_proficiency_score: int
    ai_detection_score: int
    composite_score: float

    detailed_feedback: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    weights: Dict[str, float] = field(default_factory=dict)
    scorer_version: str = SCORER_VERSION
    llm_review: Optional[Dict[str, Any]] = None

    def sub_scores(self) -> Dict[str, int]:
        return {name: getattr(self, f"{name}_score") for name in DIMENSIONS}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AIScoreRecord':
        return cls(
            readability_score=data['readability_score'],
            writing_quality_score=data['writing_quality_score'],
            seo_score=data['seo_score'],
            english_proficiency_score=data['english_proficiency_score'],
            ai_detection_score=data['ai_detection_score'],
            composite_score=data['composite_score'],
            detailed_feedback=data.get('detailed_feedback', {}),
            weights=data.get('weights', {}),
            scorer_version=data.get('scorer_version', SCORER_VERSION),
            llm_review=data.get('llm_review'),
        )
