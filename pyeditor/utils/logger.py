import logging
import logging.config
import sys
from typing import Optional

# Console lines sit next to rich CLI output, so they stay short
CONSOLE_FORMAT = '%(levelname)-8s %(name)s: %(message)s'
# The log file is read after the fact, so it carries time and call site
FILE_FORMAT = (
    '%(asctime)s %(levelname)-8s %(name)s '
    '[%(module)s:%(lineno)d %(funcName)s()] %(message)s'
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str) -> int:
    """Numeric value of a level name such as ``"debug"``.

    Raises
    ------
    ValueError
        If ``level`` is not a standard logging level name.
    """
    numeric_level = logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")
    return numeric_level


def setup_logging(
        level: str = "INFO",
        log_file: Optional[str] = None,
        *,
        max_bytes: int = 2_000_000,
        backup_count: int = 3,
):
    """
    Configure the root logger for the editor support tools:
      - Short console lines on stderr, so CLI output on stdout stays clean
      - Optional rotating file with timestamps and call sites
      - Idempotent (won't re-configure if already set)

    The level is validated even when logging is already configured.
    """
    numeric_level = resolve_level(level)

    root = logging.getLogger()
    if root.handlers:
        return

    formatters = {
        'console': {'format': CONSOLE_FORMAT},
        'file': {'format': FILE_FORMAT, 'datefmt': DATE_FORMAT},
    }

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': numeric_level,
            'formatter': 'console',
            'stream': 'ext://sys.stderr',
        },
    }
    root_handlers = ['console']

    if log_file:
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': numeric_level,
            'formatter': 'file',
            'filename': log_file,
            'maxBytes': max_bytes,
            'backupCount': backup_count,
            'encoding': 'utf-8',
        }
        root_handlers.append('file')

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': handlers,
        'root': {
            'level': numeric_level,
            'handlers': root_handlers,
        },
    })

    # Route uncaught exceptions through the root logger
    def _handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        root.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = _handle_exception
