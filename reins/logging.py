"""
Reins logging.

Library modules log through get_logger(__name__): a structlog bound logger
wrapping the standard-library logger of the same name. Nothing is printed
unless the host installs handlers, which configure_logging() does with a rich
console handler on stderr.

Events are snake_case names plus key/value context:

    segment_parsed action='copy' arguments=2
"""
import logging

import structlog
from rich.console import Console
from rich.logging import RichHandler
from structlog.typing import EventDict

Logger = structlog.stdlib.BoundLogger


def format_context(event_dict: EventDict) -> str:
    """Format the remaining event context as sorted key=value pairs.

    Args:
        event_dict: The context dictionary to format.

    Returns:
        The formatted context, or an empty string when there is none.
    """
    return ' '.join(f'{key}={value!r}' for key, value in sorted(event_dict.items()))


def render_event(_logger: logging.Logger, _method_name: str, event_dict: EventDict) -> str:
    """Render an event as a single line for the wrapped stdlib logger."""
    event_msg = event_dict.pop('event', '')
    for key in ('timestamp', 'level', 'log_level'):
        event_dict.pop(key, None)
    context = format_context(event_dict)
    return f'{event_msg} {context}' if context else str(event_msg)


def configure_logging(*, verbose: bool = False, vlevel: int = 0) -> None:
    """Configure output for reins events.

    Args:
        verbose: Enable debug output (usually the value of the built-in
            ``verbose`` flag).
        vlevel: Verbosity level (the built-in ``vlevel`` flag); any level
            above zero also enables debug output.
    """
    level = logging.DEBUG if verbose or vlevel >= 1 else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_logger(name: str) -> Logger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog logger bound to the stdlib logger ``name``
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            render_event,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = (
    'configure_logging',
    'get_logger',
)
