"""Context propagation for structured logging.

Each search call pushes its search_id and source mode here so that every log
record emitted by drivers, the normalizer, and the ranking engine during that
call carries them. Backed by contextvars, so concurrent calls handled on
different threads or tasks never see each other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields active in the current context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the current logging context.

    Args:
        **kwargs: Fields to add (later pushes override earlier values)

    Returns:
        Token for pop_log_context()

    Example:
        >>> token = push_log_context(search_id="3f2a", mode="feed")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Intended for tests."""
    LogContextVar.set({})


class log_context:
    """Context manager that scopes logging fields to a block.

    Example:
        >>> with log_context(search_id="3f2a", mode="scrape"):
        ...     logger.info("Fetching results")  # includes search_id and mode
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
