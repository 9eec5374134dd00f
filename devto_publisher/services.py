# devto_publisher/services.py
"""
Publishing workflow: read markdown files, parse their front matter and create
or update the matching dev.to articles.

A document that cannot be parsed or published is logged and reported; it does
not stop the rest of the batch.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .config import Settings, configure_logging, load_settings
from .core.diagnostics import DiagnosticSink
from .core.meta_parser import FrontMatterParser, MetadataRecord, ParseError
from .core.payload_builder import build_article_payload
from .devto.api import DevAPI
from .devto.schemas import Article
from .utils.file_handler import display_name, find_markdown_files, read_file

logger = logging.getLogger(__name__)

ACTION_CREATED = 'created'
ACTION_UPDATED = 'updated'


@dataclass
class PublishResult:
    path: Path
    action: str
    article: Optional[Article] = None


@dataclass
class PublishReport:
    results: List[PublishResult] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)

    def paths_with_action(self, action: str) -> List[Path]:
        return [result.path for result in self.results if result.action == action]

    @property
    def ok(self) -> bool:
        return not self.failed


def load_record(filepath: str | Path, directory: str = "", sink: Optional[DiagnosticSink] = None) -> MetadataRecord:
    """
    Reads one markdown file and returns its publishable record.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: If title, description or body is missing.
    """
    path = Path(filepath)
    text = read_file(path)
    parser = FrontMatterParser(text, display_name(path, directory), sink=sink)
    return parser.data()


def publish_record(
    api: DevAPI,
    record: MetadataRecord,
    existing_by_title: Dict[str, Article],
    path: Path,
) -> PublishResult:
    """
    Updates the article with the same title, or creates a new one.

    A matching article is always sent the full payload, even when only its
    metadata (description, tags, series, ...) changed.
    """
    existing = existing_by_title.get(record.title)

    if existing is None or existing.id is None:
        article = api.create(build_article_payload(record))
        existing_by_title[record.title] = article
        return PublishResult(path=path, action=ACTION_CREATED, article=article)

    article = api.update(existing.id, build_article_payload(record))
    existing_by_title[record.title] = article
    return PublishResult(path=path, action=ACTION_UPDATED, article=article)


def publish_directory(
    api: DevAPI,
    directory: str | Path,
    display_directory: Optional[str] = None,
    sink: Optional[DiagnosticSink] = None,
) -> PublishReport:
    """
    Publishes every markdown file in *directory*.

    Args:
        api: Authenticated dev.to client.
        directory: Folder holding the markdown articles.
        display_directory: Directory name shown in diagnostics (defaults to *directory*).
        sink: Diagnostic sink handed to each parser.

    Returns:
        PublishReport listing what happened to each file.

    Raises:
        FileNotFoundError: If *directory* does not exist.
        DevAPIError: If the existing articles cannot be listed.
    """
    shown_directory = str(directory) if display_directory is None else display_directory
    files = find_markdown_files(directory)
    logger.info(f"Publishing {len(files)} markdown file(s) from {shown_directory}")

    existing_by_title: Dict[str, Article] = {}
    for article in api.list_articles():
        existing_by_title.setdefault(article.title, article)

    report = PublishReport()
    for path in files:
        try:
            record = load_record(path, shown_directory, sink=sink)
            report.results.append(publish_record(api, record, existing_by_title, path))
        except ParseError as e:
            logger.error(f"Skipping {path.name}: {e}")
            report.failed.append((path, str(e)))
        except RuntimeError as e:  # DevAPIError and file read failures
            logger.error(f"Failed to publish {path.name}: {e}", exc_info=True)
            report.failed.append((path, str(e)))

    logger.info(
        f"Done: {len(report.paths_with_action(ACTION_CREATED))} created, "
        f"{len(report.paths_with_action(ACTION_UPDATED))} updated, "
        f"{len(report.failed)} failed."
    )
    return report


def publish_from_settings(settings: Optional[Settings] = None) -> PublishReport:
    """Entry point: loads settings, configures logging and publishes the articles directory."""
    settings = settings or load_settings()
    configure_logging(settings)
    with DevAPI(api_key=settings.api_key, base_url=settings.base_url) as api:
        return publish_directory(api, settings.articles_directory)
