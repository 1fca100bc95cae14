"""
Unit tests for AIScorer: weights, composite score, caching and failure wrapping.
"""
import pytest
from unittest.mock import Mock

from core.cache import CacheService
from core.exceptions import ScoringUnavailable
from core.scorer import (
    AIScorer, AIScoreRecord, DEFAULT_WEIGHTS, DEFAULT_WEIGHT_PERCENTAGES, SCORER_VERSION, resolve_weights
)
from core.scorer.models import AnalyzerResult
from core.scorer.service import composite_score
from core.utils import ContentFingerprinter
from tests import SAMPLE_ASSESSMENT


class TestResolveWeights:
    def test_defaults(self):
        weights = resolve_weights(None)

        assert weights == pytest.approx(DEFAULT_WEIGHTS)
        assert sum(weights.values()) == pytest.approx(1.0)

    def test_overrides_are_normalised(self):
        weights = resolve_weights({
            'readability_weight': 1,
            'writing_quality_weight': 1,
            'seo_weight': 1,
            'english_proficiency_weight': 1,
            'ai_detection_weight': 1,
        })

        assert all(value == pytest.approx(0.2) for value in weights.values())

    def test_partial_override_still_sums_to_one(self):
        weights = resolve_weights({'seo_weight': 0.0, 'writing_quality_weight': None})

        assert weights['seo'] == 0.0
        assert sum(weights.values()) == pytest.approx(1.0)
        assert weights['writing_quality'] == pytest.approx(0.30 / 0.80)

    def test_single_percentage_override_keeps_default_scale(self):
        weights = resolve_weights({'seo_weight': 25})

        assert weights['seo'] == pytest.approx(25 / 105)
        assert weights['writing_quality'] == pytest.approx(30 / 105)
        assert weights['readability'] == pytest.approx(20 / 105)
        assert max(weights.values()) < 0.3

    def test_percentages_match_fractional_defaults(self):
        settings = {f"{name}_weight": value for name, value in DEFAULT_WEIGHT_PERCENTAGES.items()}

        assert resolve_weights(settings) == pytest.approx(DEFAULT_WEIGHTS)

    def test_invalid_overrides_ignored(self):
        weights = resolve_weights({'seo_weight': -1, 'readability_weight': True, 'ai_detection_weight': 'x'})

        assert weights == pytest.approx(DEFAULT_WEIGHTS)

    def test_all_zero_falls_back_to_defaults(self):
        weights = resolve_weights({f"{name}_weight": 0 for name in DEFAULT_WEIGHTS})

        assert weights == pytest.approx(DEFAULT_WEIGHTS)


class TestCompositeScore:
    def test_weighted_sum_rounded_to_two_places(self):
        sub_scores = {
            'readability': 82,
            'writing_quality': 77,
            'seo': 70,
            'english_proficiency': 85,
            'ai_detection': 64,
        }
        # 16.4 + 23.1 + 14.0 + 12.75 + 9.6
        assert composite_score(sub_scores, DEFAULT_WEIGHTS) == 75.85

    def test_clamped(self):
        sub_scores = {name: 100 for name in DEFAULT_WEIGHTS}
        assert composite_score(sub_scores, DEFAULT_WEIGHTS) == 100.0


def _fixed_analyzer(score):
    analyzer = Mock()
    analyzer.analyze.return_value = AnalyzerResult(score=score, feedback=['ok'], details={'x': 1})
    return analyzer


class TestAIScorer:
    def test_scores_sample(self):
        record = AIScorer().score_assessment(SAMPLE_ASSESSMENT)

        assert isinstance(record, AIScoreRecord)
        for value in record.sub_scores().values():
            assert 0 <= value <= 100
        assert 0 <= record.composite_score <= 100
        assert record.scorer_version == SCORER_VERSION
        assert set(record.detailed_feedback) == set(DEFAULT_WEIGHTS)
        assert record.llm_review is None

    def test_deterministic(self):
        scorer = AIScorer()
        assert scorer.score_assessment(SAMPLE_ASSESSMENT) == scorer.score_assessment(SAMPLE_ASSESSMENT)

    def test_empty_content_scores_zero(self):
        record = AIScorer().score_assessment("")

        assert record.composite_score == 0
        assert all(value == 0 for value in record.sub_scores().values())

    def test_job_weights_applied(self):
        scorer = AIScorer()
        scorer.analyzers = {
            'readability': _fixed_analyzer(100),
            'writing_quality': _fixed_analyzer(0),
            'seo': _fixed_analyzer(0),
            'english_proficiency': _fixed_analyzer(0),
            'ai_detection': _fixed_analyzer(0),
        }

        record = scorer.score_assessment("text", {
            'readability_weight': 1, 'writing_quality_weight': 0, 'seo_weight': 0,
            'english_proficiency_weight': 0, 'ai_detection_weight': 0,
        })

        assert record.composite_score == 100.0
        assert record.weights['readability'] == 1.0

    def test_score_key_defaults_role_type(self):
        assert AIScorer.score_key("text", None) == AIScorer.score_key("text", {'role_type': None})
        assert AIScorer.score_key("text", None) == AIScorer.score_key("text", {'role_type': 'content_writing'})
        assert AIScorer.score_key("text", None) != AIScorer.score_key("text", {'role_type': 'copywriting'})

    def test_score_key_format(self):
        key = AIScorer.score_key("text", {'seo_weight': 0.5})
        expected = ContentFingerprinter.for_scoring(
            "text", {'seo_weight': 0.5, 'role_type': 'content_writing', 'scorer_version': SCORER_VERSION}
        )

        assert key == expected
        digest, suffix = key.split('_')
        assert len(digest) == 64
        assert len(suffix) == 8

    def test_analyzer_failure_raises_scoring_unavailable(self):
        scorer = AIScorer()
        broken = Mock()
        broken.analyze.side_effect = RuntimeError("boom")
        scorer.analyzers['seo'] = broken

        with pytest.raises(ScoringUnavailable):
            scorer.score_assessment(SAMPLE_ASSESSMENT)

    def test_llm_review_attached_without_changing_composite(self):
        reviewer = Mock()
        reviewer.review_assessment.return_value = {'summary': 'Solid piece', 'role_fit': 'strong'}

        plain = AIScorer().score_assessment(SAMPLE_ASSESSMENT)
        reviewed = AIScorer(llm_reviewer=reviewer).score_assessment(SAMPLE_ASSESSMENT)

        assert reviewed.llm_review == {'summary': 'Solid piece', 'role_fit': 'strong'}
        assert reviewed.composite_score == plain.composite_score
        reviewer.review_assessment.assert_called_once_with(SAMPLE_ASSESSMENT, 'content_writing')

    def test_llm_failure_raises_scoring_unavailable(self):
        reviewer = Mock()
        reviewer.review_assessment.side_effect = TimeoutError("slow")

        with pytest.raises(ScoringUnavailable):
            AIScorer(llm_reviewer=reviewer).score_assessment(SAMPLE_ASSESSMENT)


class TestAIScorerCache:
    def test_cache_miss_then_store(self, mock_redis):
        cache = CacheService(redis_client=mock_redis)
        scorer = AIScorer(cache=cache)

        record = scorer.score_assessment(SAMPLE_ASSESSMENT)

        key, ttl, _ = mock_redis.setex.call_args[0]
        assert key == f"ats:ai_scores:{AIScorer.score_key(SAMPLE_ASSESSMENT, None)}"
        assert ttl == 86400
        assert record.composite_score > 0

    def test_cache_hit_skips_analyzers(self):
        cached = AIScorer().score_assessment(SAMPLE_ASSESSMENT)
        cache = Mock()
        cache.get_cached_ai_scores.return_value = cached.to_dict()

        scorer = AIScorer(cache=cache)
        broken = Mock()
        broken.analyze.side_effect = AssertionError("analyzers must not run on a cache hit")
        scorer.analyzers['readability'] = broken

        assert scorer.score_assessment(SAMPLE_ASSESSMENT) == cached
        cache.cache_ai_scores.assert_not_called()

    def test_malformed_cache_entry_recomputed(self):
        cache = Mock()
        cache.get_cached_ai_scores.return_value = {'composite_score': 10}

        record = AIScorer(cache=cache).score_assessment(SAMPLE_ASSESSMENT)

        assert record.readability_score >= 0
        cache.cache_ai_scores.assert_called_once()

    def test_cache_unavailable_still_scores(self, mock_redis):
        mock_redis.get.side_effect = ConnectionError("Redis down")
        mock_redis.setex.side_effect = ConnectionError("Redis down")

        record = AIScorer(cache=CacheService(redis_client=mock_redis)).score_assessment(SAMPLE_ASSESSMENT)

        assert record == AIScorer().score_assessment(SAMPLE_ASSESSMENT)
