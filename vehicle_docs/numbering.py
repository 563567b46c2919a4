"""
Invoice and pro-forma numbering.

Numbers look like ``PREFIX-YYYY-NNNN``. When the caller neither supplies a
number nor injects a numberer, a random 4-digit suffix is used. That fallback is
NOT unique; callers that need uniqueness must pass their own number or a
numberer backed by their own storage.
"""

import itertools
import random
import threading

import structlog

logger = structlog.get_logger(__name__)

INVOICE_PREFIX = "F"
PROFORMA_PREFIX = "PF"


def format_document_number(prefix, year, sequence) -> str:
    return f"{prefix}-{year}-{sequence:04d}"


class RandomNumberer:
    """Fallback numbering with a random suffix (collisions possible)."""

    def __init__(self, rng=None):
        self._rng = rng or random.Random()

    def next_number(self, prefix, year) -> str:
        number = format_document_number(prefix, year, self._rng.randrange(10000))
        logger.warning("random_document_number", number=number, unique=False)
        return number


class SequenceNumberer:
    """In-process monotonic sequence per (prefix, year).

    Only unique within one process; persistent numbering belongs to the
    application's storage layer.
    """

    def __init__(self, start=1):
        self._start = start
        self._counters = {}
        self._lock = threading.Lock()

    def next_number(self, prefix, year) -> str:
        with self._lock:
            counter = self._counters.setdefault((prefix, year), itertools.count(self._start))
            return format_document_number(prefix, year, next(counter))


def resolve_number(explicit, prefix, issue_date, numberer=None) -> str:
    """Caller-supplied number wins; otherwise ask the numberer."""
    if explicit:
        return explicit
    numberer = numberer or RandomNumberer()
    return numberer.next_number(prefix, issue_date.year)
