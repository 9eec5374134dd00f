"""
payload_builder.py

Constructs the JSON payload for the dev.to articles API.

Dependencies:
    - logging

Inputs:
    - MetadataRecord parsed from a markdown file

Output:
    - Article dictionary ({title, description, body_markdown, published,
      series, tags, canonical_url, cover_image}) and its request envelope
"""
# devto_publisher/core/payload_builder.py
import logging
from typing import Any, Dict

from .meta_parser import MetadataRecord

logger = logging.getLogger(__name__)

ARTICLE_ENVELOPE_KEY = "article"


def build_article_payload(record: MetadataRecord) -> Dict[str, Any]:
    """
    Builds the article dictionary sent when creating or updating an article.

    Args:
        record: Parsed metadata and body of one markdown document.

    Returns:
        Dictionary keyed by the API's field names. Tags become a list.
    """
    logger.info(f"Building article payload for '{record.title}'...")

    article_data = {
        "title": record.title,
        "description": record.description,
        "body_markdown": record.body_markdown,
        "published": record.published,
        "series": record.series,
        "tags": list(record.tags),
        "canonical_url": record.canonical_url,
        "cover_image": record.cover_image,
    }

    logger.debug(f"Article payload built with {len(article_data['tags'])} tag(s), published={record.published}")
    return article_data


def wrap_article(article_data: Dict[str, Any]) -> Dict[str, Any]:
    """Wraps an article dictionary in the request body envelope."""
    return {ARTICLE_ENVELOPE_KEY: article_data}
