#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run without external services: the database is in-memory SQLite
and Redis, RQ and HTTP collaborators are mocked.

    # Run all tests
    python -m pytest tests/ -v

    # Run one area
    python -m pytest tests/unit/web -v
"""

SAMPLE_ASSESSMENT = """<h1>Writing Content That Converts Readers Into Customers</h1>
<p>Good content starts with the reader. Before I write a single line, I ask who will read the piece
and what problem they want solved. That question shapes the structure, the tone and the examples.</p>
<h2>Know your audience</h2>
<p>I interviewed three customers last month. Each one described the same frustration in different
words, and I used their words in the article. Readers noticed. Comments doubled within a week.</p>
<h2>Structure for scanning</h2>
<p>Most readers scan before they read. Short paragraphs, clear headings and a strong opening help
them decide to stay. I keep sentences varied: some short, some longer when an idea needs room.</p>
<h3>Link with purpose</h3>
<p>Useful links point readers to the <a href="/guides/content-strategy">content strategy guide</a>
or to an <a href="https://example.org/research">independent study</a> that backs up a claim.</p>
<p>Honestly, the best content I have written came from listening first. Write for people, publish
consistently, and measure what actually helps your readers.</p>
"""
