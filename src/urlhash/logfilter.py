"""logging.Filter that hashes identifiers in every record it sees.

Usage:
    handler = logging.StreamHandler()
    handler.addFilter(AnonymizingFilter(Redactor(UrlHasher(HasherConfig(salt="s")))))

The record message is formatted with its args first, then redacted, so
identifiers passed as ``%s`` arguments are caught too.
"""

from __future__ import annotations
import logging

from .redactor import Redactor


class AnonymizingFilter(logging.Filter):
    """Rewrites record.msg in place; never drops a record."""

    def __init__(self, redactor: Redactor | None = None, name: str = "") -> None:
        super().__init__(name)
        self.redactor = redactor or Redactor()

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # msg/args mismatch: redact the raw template instead
            message = str(record.msg)
        record.msg = self.redactor.redact_text(message)
        record.args = None
        return True
