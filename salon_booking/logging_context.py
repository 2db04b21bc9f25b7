"""Correlation IDs for availability lookups.

Every call to ``compute_available_slots`` runs inside a lookup scope whose
ID is derived from the salon, so the booking window gate, the per-day
pipeline and slot generation can be read back as one lookup in the logs.
A caller that already opened a scope (a web request handler, or
``find_next_available_slot`` wrapping the engine) keeps its own ID.

Usage:
    from salon_booking.logging_context import get_request_logger, lookup_scope

    logger = get_request_logger(__name__)
    with lookup_scope("salon-42") as request_id:
        logger.info("Computing slots")  # record.request_id == request_id
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "-"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


def new_request_id(salon_id: Optional[str]) -> str:
    """Build a fresh ID such as ``salon-42:3f9c1a2b`` for one availability lookup."""
    return f"{salon_id or 'salon'}:{uuid.uuid4().hex[:8]}"


@contextmanager
def lookup_scope(salon_id: Optional[str]) -> Iterator[str]:
    """Run the block under a lookup correlation ID, restoring the previous one on exit.

    An ID already set by an enclosing scope is reused as is.
    """
    current = _request_id.get()
    if current != NO_REQUEST_ID:
        yield current
        return
    token = _request_id.set(new_request_id(salon_id))
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger with the RequestIdFilter attached (once)."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
