#!/usr/bin/env python3
"""
SEO - on-page signals of a web-ready article.

Five components averaged equally: heading structure, keyword optimization,
linking, meta-like intro/title content and content length.
"""

import re
from collections import Counter
from typing import List, Dict, Any, Optional

from core.scorer.models import AnalyzerResult
from core.scorer import text_stats

STOP_WORDS = {
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
    'is', 'are', 'was', 'were', 'be', 'been', 'have', 'has', 'had', 'do', 'does', 'did',
    'will', 'would', 'could', 'should', 'may', 'might', 'must', 'can', 'that', 'this',
    'these', 'those', 'they', 'them', 'their', 'there', 'where', 'when', 'why', 'how',
    'what', 'which', 'who', 'whom', 'whose', 'if', 'then', 'else', 'while', 'until',
    'since', 'before', 'after', 'during', 'through', 'above', 'below', 'up', 'down',
    'out', 'off', 'over', 'under', 'again', 'further', 'once',
}

GENERIC_ANCHORS = {'click here', 'read more', 'here', 'this', 'link'}

STRUCTURED_INDICATORS = ['article', 'author', 'published', 'updated', 'category', 'tag']

_LINK = re.compile(r'<a[^>]+href=["\']([^"\']*)["\'][^>]*>(.*?)</a>', re.IGNORECASE | re.DOTALL)
_PHRASE = re.compile(r'\b\w+\s+\w+\s+\w+\b')


def _headings(content: str, level: int) -> List[str]:
    return re.findall(rf'<h{level}[^>]*>.*?</h{level}>', content, re.IGNORECASE | re.DOTALL)


def _keyword_counts(content: str) -> Counter:
    return Counter(w for w in text_stats.word_tokens(content, min_length=4) if w not in STOP_WORDS)


def heading_structure_score(content: str) -> int:
    score = 60
    h1, h2, h3, h4 = (_headings(content, level) for level in (1, 2, 3, 4))

    if len(h1) == 1:
        score += 15
    elif not h1:
        score -= 10
    else:
        score -= 20

    if h2:
        score += 10
    if h3:
        score += 5

    heading_text = ' '.join(text_stats.strip_tags(tag).lower() for tag in h1 + h2 + h3 + h4)
    if heading_text:
        keywords = text_stats.top_words(text_stats.word_tokens(content, min_length=4), 5)
        in_headings = sum(1 for word in keywords if word in heading_text)
        if in_headings > 2:
            score += 15
        elif in_headings > 0:
            score += 5

    return text_stats.clamp_score(score)


def keyword_optimization_score(content: str) -> int:
    tokens = text_stats.word_tokens(content, min_length=4)
    if not tokens:
        return 0

    score = 70
    for _, count in _keyword_counts(content).most_common(3):
        density = count / len(tokens) * 100
        if 1 <= density <= 3:
            score += 10
        elif 3 < density <= 5:
            score += 5
        elif density > 5:
            score -= 10  # Keyword stuffing

    phrases = Counter(_PHRASE.findall(content.lower()))
    if any(count > 1 for count in phrases.values()):
        score += 10

    return text_stats.clamp_score(score)


def linking_score(content: str, site_url: Optional[str] = None) -> int:
    score = 70
    links = _LINK.findall(content)

    def is_external(href: str) -> bool:
        if site_url and href.startswith(site_url):
            return False
        return href.startswith('http://') or href.startswith('https://')

    internal = [href for href, _ in links if not is_external(href)]
    external = [href for href, _ in links if is_external(href)]

    if internal:
        score += 15
    if external:
        score += 10

    anchors = [text_stats.strip_tags(text).strip().lower() for _, text in links]
    generic = [a for a in anchors if a in GENERIC_ANCHORS]

    if links and not generic:
        score += 15
    elif len(generic) < len(links) / 2:
        score += 5
    elif generic:
        score -= 10

    return text_stats.clamp_score(score)


def meta_elements_score(content: str) -> int:
    score = 50

    sentence_list = text_stats.sentences(content)
    first_sentence = sentence_list[0].strip() if sentence_list else ''
    if 120 <= len(first_sentence) <= 160:
        score += 20
    elif 100 <= len(first_sentence) <= 200:
        score += 10

    first_line = content.split('\n', 1)[0]
    title = text_stats.strip_tags(first_line).strip()
    if 30 <= len(title) <= 60:
        score += 20
    elif title:
        score += 10

    if text_stats.count_phrases(content.lower(), STRUCTURED_INDICATORS) > 2:
        score += 10

    return text_stats.clamp_score(score)


def content_length_score(content: str) -> int:
    words = len(text_stats.strip_tags(content).split())

    if 300 <= words <= 600:
        return 100
    if 600 < words <= 1200:
        return 95
    if 200 <= words < 300:
        return 85
    if 1200 < words <= 2000:
        return 90
    if words < 200:
        return 60
    return 80


def find_issues(content: str) -> List[Dict[str, Any]]:
    issues = []

    tokens = text_stats.word_tokens(content, min_length=4)
    if tokens:
        stuffed = [w for w, c in _keyword_counts(content).items() if c / len(tokens) * 100 > 5]
        if stuffed:
            issues.append({
                'type': 'keyword-stuffing',
                'message': f"Potential keyword stuffing detected for: {', '.join(stuffed)}",
                'severity': 'high',
            })

    has_headings = any(tag in content for tag in ('<h1', '<h2', '<h3'))
    if not has_headings and len(content) > 300:
        issues.append({
            'type': 'structure',
            'message': 'No headings found - add H1, H2, H3 tags for better structure',
            'severity': 'medium',
        })

    return issues


class SEOAnalyzer:
    """Scores search-engine readiness of HTML or plain-text content."""

    def __init__(self, site_url: Optional[str] = None):
        self.site_url = site_url

    def analyze(self, content: str) -> AnalyzerResult:
        if not content or not content.strip():
            return AnalyzerResult(score=0, feedback=['No content to analyze'], details={
                'heading_structure_score': 0,
                'keyword_optimization_score': 0,
                'internal_linking_score': 0,
                'meta_elements_score': 0,
                'content_length_score': 0,
                'issues': [],
            })

        components = {
            'heading_structure_score': heading_structure_score(content),
            'keyword_optimization_score': keyword_optimization_score(content),
            'internal_linking_score': linking_score(content, self.site_url),
            'meta_elements_score': meta_elements_score(content),
            'content_length_score': content_length_score(content),
        }
        score = text_stats.clamp_score(sum(components.values()) / len(components))

        return AnalyzerResult(
            score=score,
            feedback=self._recommendations(components),
            details={**components, 'issues': find_issues(content)},
        )

    @staticmethod
    def _recommendations(components: Dict[str, int]) -> List[str]:
        messages = {
            'heading_structure_score': 'Improve heading structure with proper H1, H2, H3 hierarchy',
            'keyword_optimization_score': 'Optimize keyword usage and avoid over-optimization',
            'internal_linking_score': 'Add internal links with descriptive anchor text',
            'meta_elements_score': 'Include meta-friendly introductory content',
            'content_length_score': 'Adjust content length for optimal SEO performance',
        }
        recommendations = [messages[name] for name, value in components.items() if value < 80]
        if not recommendations:
            recommendations.append('Great SEO optimization! Consider A/B testing for further improvements')
        return recommendations
