"""
Unit tests for the five content analyzers.

Tests verify:
- Every analyzer returns an integer score in [0, 100]
- Identical input always gives identical output
- Empty and whitespace-only input scores 0 with a single feedback line
- Component heuristics behave as documented
"""
import pytest

from core.scorer import text_stats
from core.scorer.readability import ReadabilityAnalyzer
from core.scorer.writing_quality import WritingQualityAnalyzer
from core.scorer.seo import (
    SEOAnalyzer, content_length_score, linking_score, heading_structure_score, find_issues
)
from core.scorer.english_proficiency import EnglishProficiencyAnalyzer, language_confidence
from core.scorer.ai_detection import AIDetectionAnalyzer, detection_confidence, SIGNAL_WEIGHTS
from tests import SAMPLE_ASSESSMENT

ANALYZERS = [
    ReadabilityAnalyzer(),
    WritingQualityAnalyzer(),
    SEOAnalyzer(),
    EnglishProficiencyAnalyzer(),
    AIDetectionAnalyzer(),
]

SAMPLES = [
    SAMPLE_ASSESSMENT,
    "Short.",
    "word " * 3000,
    "Furthermore, it is important to note that we must delve into the landscape. " * 20,
    "!!! ??? ...",
    "<h1></h1><a href='x'></a>",
    "I make a research about informations. All of them are good. I waited a hour.",
]


class TestAnalyzerContract:
    @pytest.mark.parametrize("analyzer", ANALYZERS, ids=lambda a: a.__class__.__name__)
    @pytest.mark.parametrize("text", SAMPLES)
    def test_score_is_bounded_integer(self, analyzer, text):
        result = analyzer.analyze(text)

        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100
        assert isinstance(result.feedback, list)

    @pytest.mark.parametrize("analyzer", ANALYZERS, ids=lambda a: a.__class__.__name__)
    def test_deterministic(self, analyzer):
        first = analyzer.analyze(SAMPLE_ASSESSMENT)
        second = analyzer.analyze(SAMPLE_ASSESSMENT)

        assert first == second

    @pytest.mark.parametrize("analyzer", ANALYZERS, ids=lambda a: a.__class__.__name__)
    @pytest.mark.parametrize("text", ["", "   \n\t  "])
    def test_empty_input_scores_zero(self, analyzer, text):
        result = analyzer.analyze(text)

        assert result.score == 0
        assert result.feedback == ['No content to analyze']


class TestTextStats:
    def test_clamp_rounds_half_up(self):
        assert text_stats.clamp_score(74.5) == 75
        assert text_stats.clamp_score(74.49) == 74
        assert text_stats.clamp_score(-3) == 0
        assert text_stats.clamp_score(180) == 100
        assert text_stats.clamp_score(float('nan')) == 0

    def test_sentence_and_word_counts_never_zero(self):
        assert text_stats.sentence_count("") == 1
        assert text_stats.word_count("") == 1

    def test_syllables(self):
        assert text_stats.syllables_in_word("cat") == 1
        assert text_stats.syllables_in_word("make") == 1
        assert text_stats.syllables_in_word("readability") == 5
        assert text_stats.syllables_in_word("123") == 0

    def test_variance_of_empty_is_zero(self):
        assert text_stats.variance([]) == 0.0
        assert text_stats.variance([2, 4]) == 1.0

    def test_top_words_ties_keep_first_seen_order(self):
        assert text_stats.top_words(["beta", "alpha", "beta", "alpha", "gamma"], 2) == ["beta", "alpha"]


class TestSEOComponents:
    def test_content_length_bands(self):
        assert content_length_score("word " * 100) == 60
        assert content_length_score("word " * 250) == 85
        assert content_length_score("word " * 450) == 100
        assert content_length_score("word " * 900) == 95
        assert content_length_score("word " * 1500) == 90
        assert content_length_score("word " * 2500) == 80

    def test_descriptive_internal_link(self):
        assert linking_score('<a href="/guides/pricing">pricing guide</a>') == 100

    def test_generic_anchor_penalised(self):
        assert linking_score('<a href="/guides/pricing">click here</a>') == 75

    def test_site_url_links_count_as_internal(self):
        content = '<a href="https://acme.example/docs">writing docs</a>'

        assert linking_score(content, site_url="https://acme.example") == 100
        assert linking_score(content) == 95

    def test_multiple_h1_penalised(self):
        single = heading_structure_score("<h1>Guide</h1><p>text</p>")
        multiple = heading_structure_score("<h1>Guide</h1><h1>Another</h1><p>text</p>")

        assert single > multiple

    def test_missing_headings_reported_for_long_content(self):
        issues = find_issues("Plain paragraph text without markup. " * 20)

        assert any(issue['type'] == 'structure' for issue in issues)


class TestEnglishProficiency:
    def test_language_confidence_bands(self):
        assert language_confidence(95) == 'native'
        assert language_confidence(85) == 'advanced'
        assert language_confidence(70) == 'intermediate'
        assert language_confidence(40) == 'beginner'

    def test_common_errors_reported(self):
        result = EnglishProficiencyAnalyzer().analyze(
            "I make a research about informations. I waited a hour for the results."
        )
        messages = ' '.join(issue['message'] for issue in result.details['issues'])

        assert 'an hour' in messages
        assert 'uncountable' in messages


class TestAIDetection:
    def test_details_shape(self):
        result = AIDetectionAnalyzer().analyze(SAMPLE_ASSESSMENT)

        assert result.details['human_likelihood'] == result.score / 100
        assert result.details['ai_likelihood'] == round(1 - result.score / 100, 2)
        assert set(result.details['analysis']) == set(SIGNAL_WEIGHTS)
        assert result.details['confidence'] in ('low', 'medium', 'high')

    def test_signal_weights_sum_to_one(self):
        assert sum(SIGNAL_WEIGHTS.values()) == pytest.approx(1.0)

    def test_ai_phrasing_flagged(self):
        result = AIDetectionAnalyzer().analyze(
            "In today's digital landscape, it is important to note that content matters. "
            "Furthermore, we must delve into the details. Moreover, quality is key."
        )

        assert any(i['feature'] == 'AI-typical phrasing' for i in result.details['indicators'])

    def test_detection_confidence(self):
        strong = {'type': 'ai', 'confidence': 0.8}
        weak = {'type': 'ai', 'confidence': 0.5}

        assert detection_confidence([strong, strong]) == 'high'
        assert detection_confidence([strong]) == 'medium'
        assert detection_confidence([weak, weak, weak]) == 'medium'
        assert detection_confidence([weak]) == 'low'

    def test_empty_input_details(self):
        result = AIDetectionAnalyzer().analyze("")

        assert result.details['human_likelihood'] == 0
        assert result.details['ai_likelihood'] == 1
