import logging
import logging.handlers
import sys
import os
from app.core.config import settings


class RequestIDFilter(logging.Filter):
    """Guarantee a request_id attribute so formats may reference it outside requests."""

    def filter(self, record):
        record.request_id = getattr(record, 'request_id', 'N/A')
        return True


def _configured_level() -> int:
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def _rotating_file_handler(path: str) -> logging.Handler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )


def setup_logging():
    """Route application logs to stdout, and to a rotating file outside debug mode."""
    formatter = logging.Formatter(settings.LOG_FORMAT)
    level = _configured_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    if not settings.DEBUG:
        handlers.append(_rotating_file_handler(settings.LOG_FILE))

    request_id_filter = RequestIDFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        handler.addFilter(request_id_filter)
        root_logger.addHandler(handler)

    # SQL echo is controlled by DB_ECHO, not by the application log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger

# Initialize logging
logger = setup_logging()
