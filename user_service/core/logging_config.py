import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from opentelemetry import trace

LOG_FORMAT = (
    "%(asctime)s - [%(levelname)s] - %(name)s - "
    "trace_id=%(trace_id)s span_id=%(span_id)s - %(message)s"
)


class TraceContextFilter(logging.Filter):
    """Добавляет в запись идентификаторы текущего спана OpenTelemetry."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = trace.format_trace_id(span_context.trace_id)
            record.span_id = trace.format_span_id(span_context.span_id)
        else:
            record.trace_id = "-"
            record.span_id = "-"
        return True


def setup_logging(
    level: str = "INFO",
    log_path: str = "logs/user-service.log",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    formatter = logging.Formatter(LOG_FORMAT)
    trace_filter = TraceContextFilter()

    log_dir = os.path.dirname(log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    stdout_handler = logging.StreamHandler(sys.stdout)

    for handler in (file_handler, stdout_handler):
        handler.setFormatter(formatter)
        handler.addFilter(trace_filter)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[file_handler, stdout_handler],
        force=True,
    )

    # "шумные" библиотеки
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)
