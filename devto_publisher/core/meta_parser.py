# devto_publisher/core/meta_parser.py
"""
Extracts article metadata and the markdown body from a document that starts
with a ``---`` delimited front-matter block.

Only a fixed, flat set of scalar fields is recognised (one ``key: value`` line
per field); this is deliberately not a YAML parser. Every field accessor is
total: a missing block or key falls back to the field's default and reports a
diagnostic. Only ``data()`` can fail, when one of the required fields
(title, description, body) is missing.
"""

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import unquote

from .diagnostics import DiagnosticSink, LoggingDiagnosticSink, Severity

logger = logging.getLogger(__name__)

# --- Constants ---
# Opening '---' line (after optional leading whitespace), then the shortest
# span up to the next line consisting of exactly '---'.
FRONT_MATTER_PATTERN = re.compile(r"\A\s*---\n(.*?)\n---(?=\n|\Z)", re.DOTALL)
FIELD_LINE_PATTERN = re.compile(r"^[ \t]*([^:\n]*):[ \t]*(.*?)[ \t]*$")
MALFORMED_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")
# Line break ending the closing '---', then at most one blank separator line
BODY_SEPARATOR_BREAKS = 2

KNOWN_FIELDS: Tuple[str, ...] = (
    "title",
    "description",
    "published",
    "tags",
    "series",
    "canonical_url",
    "cover_image",
)


class ParseError(ValueError):
    """Raised when a document lacks one of the fields required to publish it."""

    def __init__(self, display_name: str):
        super().__init__(f"Can't Parse meta-data in {display_name}")
        self.display_name = display_name


@dataclass(frozen=True)
class MetadataRecord:
    """Normalized, publishable article: metadata plus markdown body."""

    title: str
    description: str
    body_markdown: str
    published: bool = False
    series: str = ""
    tags: Tuple[str, ...] = ()
    canonical_url: str = ""
    cover_image: Optional[str] = None


class FrontMatterParser:
    """
    Read-only view over one document's front matter and body.

    Args:
        text: Whole document content, kept verbatim.
        display_name: Identifier used in every diagnostic message.
        sink: Receives diagnostics; defaults to the logging-backed sink.
    """

    def __init__(self, text: str, display_name: str, sink: Optional[DiagnosticSink] = None):
        self._text = text
        self._display_name = display_name
        self._sink = sink if sink is not None else LoggingDiagnosticSink(logger)

        match = FRONT_MATTER_PATTERN.match(text)
        self._block: Optional[str] = match.group(1) if match else None
        self._block_end = match.end() if match else 0
        self._fields: Mapping[str, str] = MappingProxyType(
            self._scan_fields(self._block) if self._block is not None else {}
        )

        if text == "":
            self._sink.record(Severity.INFO, f"{display_name} is Empty")
        elif self._block is None:
            self._sink.record(Severity.INFO, f"yaml meta-data not found in {display_name}")
        else:
            logger.debug(f"Front matter found in {display_name}: {sorted(self._fields)}")

    @staticmethod
    def _scan_fields(block: str) -> Dict[str, str]:
        """Single pass over the block: known field name -> raw value, first occurrence wins."""
        fields: Dict[str, str] = {}
        for line in block.split("\n"):
            match = FIELD_LINE_PATTERN.match(line)
            if match and match.group(1) in KNOWN_FIELDS:
                fields.setdefault(match.group(1), match.group(2))
        return fields

    # --- Read-only state ---

    @property
    def text(self) -> str:
        return self._text

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def block(self) -> Optional[str]:
        """Raw text between the delimiter lines, or None when there is no block."""
        return self._block

    @property
    def has_front_matter(self) -> bool:
        return self._block is not None

    # --- Helpers ---

    def _raw(self, field: str, severity: Severity, message: str) -> Optional[str]:
        """Raw value of *field*, or None after reporting *message*."""
        value = self._fields.get(field)
        if value is None:
            self._sink.record(severity, message)
        return value

    def _decode(self, field: str, value: str) -> str:
        # Malformed escapes are returned undecoded
        if MALFORMED_ESCAPE_PATTERN.search(value):
            self._report_malformed(field)
            return value
        try:
            return unquote(value, errors="strict")
        except UnicodeDecodeError:
            self._report_malformed(field)
            return value

    def _report_malformed(self, field: str) -> None:
        self._sink.record(
            Severity.WARNING,
            f"Malformed percent-encoding in '{field}:' of {self._display_name}",
        )

    # --- Field accessors ---

    def title(self) -> Optional[str]:
        raw = self._raw("title", Severity.WARNING, f"'title:' is Required in {self._display_name}")
        return None if raw is None else self._decode("title", raw)

    def description(self) -> Optional[str]:
        raw = self._raw(
            "description",
            Severity.INFO,
            f"Set 'description:' as {{null}} default in {self._display_name}",
        )
        return None if raw is None else self._decode("description", raw)

    def cover_image(self) -> Optional[str]:
        raw = self._raw(
            "cover_image",
            Severity.INFO,
            f"Set 'cover_image:' as {{null}} default in {self._display_name}",
        )
        return None if raw is None else self._decode("cover_image", raw)

    def series(self) -> str:
        raw = self._raw(
            "series",
            Severity.INFO,
            f"Set 'series:' as \"\"(empty) default in {self._display_name}",
        )
        return "" if raw is None else self._decode("series", raw)

    def canonical_url(self) -> str:
        raw = self._raw(
            "canonical_url",
            Severity.INFO,
            f"Set 'canonical_url:' as \"\"(empty) default in {self._display_name}",
        )
        return "" if raw is None else self._decode("canonical_url", raw)

    def tags(self) -> List[str]:
        raw = self._raw("tags", Severity.INFO, f"Set 'tags:' as [] default in {self._display_name}")
        if raw is None:
            return []
        decoded = (self._decode("tags", piece.strip()) for piece in raw.split(","))
        return [tag for tag in decoded if tag != ""]

    def published(self) -> bool:
        raw = self._raw("published", Severity.INFO, f'Set "published: false" in {self._display_name}')
        return raw == "true"

    def body(self) -> Optional[str]:
        """
        Document with the front matter removed: everything up to the closing
        ``---``, its line break and one blank separator line. The rest of the
        text is returned untouched, including later ``---`` lines.
        """
        msg = f'Can\'t Parse "Markdown Body" in {self._display_name}'
        if self._block is None:
            self._sink.record(Severity.WARNING, msg)
            return None

        body = self._text[self._block_end:]
        for _ in range(BODY_SEPARATOR_BREAKS):
            if body.startswith("\n"):
                body = body[1:]
        if not body:
            self._sink.record(Severity.WARNING, msg)
            return None
        return body

    def data(self) -> MetadataRecord:
        """
        Assembles the publishable record.

        Raises:
            ParseError: If title, description or body is missing or empty.
        """
        title = self.title()
        description = self.description()
        body_markdown = self.body()

        if title and description and body_markdown:
            return MetadataRecord(
                title=title,
                description=description,
                body_markdown=body_markdown,
                published=self.published(),
                series=self.series(),
                tags=tuple(self.tags()),
                canonical_url=self.canonical_url(),
                cover_image=self.cover_image(),
            )

        raise ParseError(self._display_name)
