import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from workspace_registry.config import Settings

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(funcName)s:%(lineno)d %(message)s'

_LEVEL_NAMES = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# logging.Logger.makeRecord raises KeyError when extra overwrites these
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord('', logging.NOTSET, '', 0, '', None, None).__dict__
) | {'message', 'asctime'}


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    enable_structured_logging: bool = False,
) -> None:
    """Configure root logging with a console handler and optional rotating file."""

    # WSREG_LOG_LEVEL wins over the argument
    env_level = os.getenv('WSREG_LOG_LEVEL', '').upper()
    if env_level in _LEVEL_NAMES:
        level = getattr(logging, env_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(_build_formatter(enable_structured_logging))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_formatter(enable_structured_logging))
        root_logger.addHandler(file_handler)

    logging.getLogger('workspace_registry').setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - Level: {logging.getLevelName(level)}")
    if log_file:
        logger.info(f"Log file: {log_file}")


def configure_logging_from_settings(settings: Optional["Settings"] = None) -> None:
    """Apply the logging options held in :class:`Settings`."""
    if settings is None:
        from workspace_registry.config import get_settings

        settings = get_settings()

    level_name = settings.log_level.upper()
    level = getattr(logging, level_name) if level_name in _LEVEL_NAMES else logging.INFO
    configure_logging(
        level=level,
        log_file=settings.log_file,
        enable_structured_logging=settings.structured_logging,
    )


def _build_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return StructuredFormatter()
    return logging.Formatter(LOG_FORMAT)


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        import json
        from datetime import datetime, timezone

        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'workspace'):
            log_entry['workspace'] = record.workspace
        if hasattr(record, 'operation'):
            log_entry['operation'] = record.operation

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def get_registry_logger(name: str) -> logging.Logger:
    """Get a logger under the ``workspace_registry`` namespace."""
    return logging.getLogger(f'workspace_registry.{name}')


def log_workspace_operation(
    logger: logging.Logger,
    operation: str,
    workspace: Optional[str] = None,
    level: int = logging.INFO,
    **kwargs
) -> None:
    """Log a registry operation with the workspace name attached as context.

    Extra keys that collide with ``LogRecord`` attributes (``name``,
    ``message``, ``module``, ...) are dropped.
    """
    extra = {'operation': operation}
    if workspace is not None:
        extra['workspace'] = workspace

    extra.update({key: value for key, value in kwargs.items() if key not in _RESERVED_RECORD_KEYS})

    logger.log(level, operation, extra=extra)
