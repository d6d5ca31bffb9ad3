"""Chat session id in log output.

The id of the chat session handling the current message lives in a
ContextVar. ``session_scope`` binds it for the duration of one turn, and
the handler built by ``build_log_handler`` stamps it onto every record
and renders it, so module loggers need no setup of their own.

Usage:
    with session_scope("CHAT-1a2b3c4d"):
        logging.getLogger(__name__).info("Classifying message")
    # 2025-03-15 10:00:00 [philview.session] [CHAT-1a2b3c4d] INFO: Classifying message
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

NO_SESSION = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_current_session: ContextVar[str] = ContextVar("philview_session", default=NO_SESSION)


def get_session_id() -> str:
    return _current_session.get()


@contextmanager
def session_scope(session_id: str) -> Iterator[str]:
    """Bind ``session_id`` to log records emitted inside the block."""
    token = _current_session.set(session_id)
    try:
        yield session_id
    finally:
        _current_session.reset(token)


class SessionIdFilter(logging.Filter):
    """Stamps the bound session id onto records passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = _current_session.get()  # type: ignore[attr-defined]
        return True


def build_log_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler whose output includes the chat session id."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler.addFilter(SessionIdFilter())
    return handler


def configure_logging(level: str) -> None:
    """Install the session-aware handler on the root logger.

    A no-op when the root logger already has handlers, as with
    ``logging.basicConfig``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[build_log_handler()],
    )
