# devto_publisher/tests/conftest.py

import pytest

from devto_publisher.core.diagnostics import CollectingDiagnosticSink

SAMPLE_ARTICLE = """---
title: My Post
description: short blurb
published: true
tags: a, b, c
series: optional
canonical_url: https://example.com
cover_image: https://example.com/img.png
---
Markdown body content starts here.
"""


@pytest.fixture
def sink():
    """Captures parser diagnostics instead of logging them."""
    return CollectingDiagnosticSink()


@pytest.fixture
def sample_article():
    return SAMPLE_ARTICLE


@pytest.fixture
def articles_dir(tmp_path):
    """A directory with one valid article, one without front matter and a non-markdown file."""
    directory = tmp_path / "articles"
    directory.mkdir()
    (directory / "good.md").write_text(SAMPLE_ARTICLE, encoding="utf-8")
    (directory / "plain.md").write_text("Just prose, no metadata.\n", encoding="utf-8")
    (directory / "notes.txt").write_text("ignored", encoding="utf-8")
    return directory
