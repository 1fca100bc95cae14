#!/usr/bin/env python3
"""
AI Scorer - runs the five analyzers and blends them into a composite score.

Composite = sum(weight_i * score_i) with default weights
readability 0.20, writing quality 0.30, SEO 0.20,
English proficiency 0.15, AI detection 0.15.

Per-job weight overrides are percentages on the same scale as
DEFAULT_WEIGHT_PERCENTAGES (20/30/20/15/15); the merged set is normalised
so it always sums to 1.
Results are cached by content + settings fingerprint for 24 hours; the
cache is an accelerator only and never changes the result.
"""

import logging
from typing import Optional, Dict, Any

from core.cache import CacheService, AI_SCORES_TTL_SECONDS
from core.exceptions import ScoringUnavailable
from core.llm.interfaces import LLMProvider
from core.utils import ContentFingerprinter

from core.scorer.models import AIScoreRecord, AnalyzerResult, DIMENSIONS, SCORER_VERSION
from core.scorer.readability import ReadabilityAnalyzer
from core.scorer.writing_quality import WritingQualityAnalyzer
from core.scorer.seo import SEOAnalyzer
from core.scorer.english_proficiency import EnglishProficiencyAnalyzer
from core.scorer.ai_detection import AIDetectionAnalyzer

logger = logging.getLogger(__name__)

DEFAULT_ROLE_TYPE = 'content_writing'

DEFAULT_WEIGHT_PERCENTAGES: Dict[str, float] = {
    'readability': 20.0,
    'writing_quality': 30.0,
    'seo': 20.0,
    'english_proficiency': 15.0,
    'ai_detection': 15.0,
}

DEFAULT_WEIGHTS: Dict[str, float] = {
    name: value / 100.0 for name, value in DEFAULT_WEIGHT_PERCENTAGES.items()
}


def resolve_weights(job_settings: Optional[Dict[str, Any]]) -> Dict[str, float]:
    """
    Merge per-job ``<dimension>_weight`` overrides (percentages, e.g. 25 for
    25%) onto DEFAULT_WEIGHT_PERCENTAGES and normalise to sum 1. Negative or
    non-numeric overrides are ignored.
    """
    weights = dict(DEFAULT_WEIGHT_PERCENTAGES)
    for name in DIMENSIONS:
        override = (job_settings or {}).get(f"{name}_weight")
        if isinstance(override, (int, float)) and not isinstance(override, bool) and override >= 0:
            weights[name] = float(override)

    total = sum(weights.values())
    if total <= 0:
        return dict(DEFAULT_WEIGHTS)
    return {name: value / total for name, value in weights.items()}


def composite_score(sub_scores: Dict[str, int], weights: Dict[str, float]) -> float:
    value = sum(weights[name] * sub_scores[name] for name in DIMENSIONS)
    return round(max(0.0, min(100.0, value)), 2)


class AIScorer:
    """
    Deterministic assessment scorer.

    Args:
        cache: Optional CacheService for result reuse.
        llm_reviewer: Optional LLMProvider; when set its review is attached
            to the record as ``llm_review`` and never affects the composite.
        site_url: Base URL treated as internal when scoring links.
        scores_ttl: Seconds a cached result stays valid.
    """

    def __init__(
        self,
        cache: Optional[CacheService] = None,
        llm_reviewer: Optional[LLMProvider] = None,
        site_url: Optional[str] = None,
        scores_ttl: int = AI_SCORES_TTL_SECONDS
    ):
        self.cache = cache
        self.scores_ttl = scores_ttl
        self.llm_reviewer = llm_reviewer
        self.analyzers = {
            'readability': ReadabilityAnalyzer(),
            'writing_quality': WritingQualityAnalyzer(),
            'seo': SEOAnalyzer(site_url=site_url),
            'english_proficiency': EnglishProficiencyAnalyzer(),
            'ai_detection': AIDetectionAnalyzer(),
        }

    @staticmethod
    def score_key(content: str, job_settings: Optional[Dict[str, Any]]) -> str:
        settings = dict(job_settings or {})
        settings['role_type'] = settings.get('role_type') or DEFAULT_ROLE_TYPE
        settings['scorer_version'] = SCORER_VERSION
        return ContentFingerprinter.for_scoring(content, settings)

    def score_assessment(
        self,
        content: str,
        job_settings: Optional[Dict[str, Any]] = None
    ) -> AIScoreRecord:
        """Score ``content``. Raises ScoringUnavailable on any analyzer or reviewer failure."""
        content = content or ''
        key = self.score_key(content, job_settings)

        if self.cache is not None:
            cached = self.cache.get_cached_ai_scores(key)
            if cached:
                try:
                    record = AIScoreRecord.from_dict(cached)
                    logger.info(f"Using cached AI scores for {key[:16]}")
                    return record
                except (KeyError, TypeError) as e:
                    logger.warning(f"Ignoring malformed cached scores for {key[:16]}: {e}")

        results = self._run_analyzers(content)
        weights = resolve_weights(job_settings)
        sub_scores = {name: results[name].score for name in DIMENSIONS}

        record = AIScoreRecord(
            readability_score=sub_scores['readability'],
            writing_quality_score=sub_scores['writing_quality'],
            seo_score=sub_scores['seo'],
            english_proficiency_score=sub_scores['english_proficiency'],
            ai_detection_score=sub_scores['ai_detection'],
            composite_score=composite_score(sub_scores, weights),
            detailed_feedback={name: results[name].to_feedback_dict() for name in DIMENSIONS},
            weights=weights,
        )

        if self.llm_reviewer is not None:
            role_type = (job_settings or {}).get('role_type') or DEFAULT_ROLE_TYPE
            record.llm_review = self._review(content, role_type)

        logger.debug(f"Composite {record.composite_score} from {sub_scores}")

        if self.cache is not None:
            self.cache.cache_ai_scores(key, record.to_dict(), ttl=self.scores_ttl)

        return record

    def _run_analyzers(self, content: str) -> Dict[str, AnalyzerResult]:
        results = {}
        for name, analyzer in self.analyzers.items():
            try:
                results[name] = analyzer.analyze(content)
            except Exception as e:
                logger.error(f"Analyzer {name} failed: {e}")
                raise ScoringUnavailable(f"Analyzer {name} failed: {e}") from e
        return results

    def _review(self, content: str, role_type: str) -> Dict[str, Any]:
        try:
            return self.llm_reviewer.review_assessment(content, role_type)
        except Exception as e:
            logger.error(f"LLM review failed: {e}")
            raise ScoringUnavailable(f"LLM review failed: {e}") from e
