# devto_publisher/core/diagnostics.py
"""
diagnostics.py

Diagnostic sinks used by the front-matter parser to report fallbacks
(missing fields, defaults applied) without depending on a global logger.

Input: (severity, message) pairs
Output: log records, or an in-memory list for callers that report per document
"""

import enum
import logging
from typing import List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class Severity(enum.Enum):
    INFO = "info"
    WARNING = "warning"


class DiagnosticSink(Protocol):
    """Anything that can receive parser diagnostics."""

    def record(self, severity: Severity, message: str) -> None:
        ...


class LoggingDiagnosticSink:
    """Forwards diagnostics to the standard logging hierarchy."""

    def __init__(self, target: Optional[logging.Logger] = None):
        self._logger = target or logger

    def record(self, severity: Severity, message: str) -> None:
        if severity is Severity.WARNING:
            self._logger.warning(message)
        else:
            self._logger.info(message)


class CollectingDiagnosticSink:
    """Keeps every diagnostic in memory, in emission order."""

    def __init__(self):
        self.records: List[Tuple[Severity, str]] = []

    def record(self, severity: Severity, message: str) -> None:
        self.records.append((severity, message))

    def messages(self, severity: Optional[Severity] = None) -> List[str]:
        return [msg for sev, msg in self.records if severity is None or sev is severity]

    def clear(self) -> None:
        self.records.clear()
