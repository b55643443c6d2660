import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import IO, Optional

from pythonjsonlogger import jsonlogger

from review_loader.core.config import settings
from review_loader.core.trace import get_run_id

JSON_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s %(lineno)d "
    "%(run_id)s %(service)s %(env)s"
)


class RunContextFilter(logging.Filter):
    """Stamp run_id/service/env onto a record.

    Runs in the caller's thread, before the record is queued: the
    listener thread would otherwise see a different run_id context.
    """

    def __init__(self, service: str, env: str) -> None:
        super().__init__()
        self.service = service
        self.env = env

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = (getattr(record, "run_id", None)
                         or get_run_id() or "-")
        record.service = getattr(record, "service", None) or self.service
        record.env = getattr(record, "env", None) or self.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = settings.app_name,
                       level: str | int = logging.INFO,
                       stream: Optional[IO[str]] = None) -> None:
    """Route root logging through a queue to one JSON stream handler."""
    global _listener

    if _listener is not None:
        shutdown_logging()

    root = logging.getLogger()
    root.setLevel(level)

    stream_handler = logging.StreamHandler(stream or sys.stdout)
    stream_handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    queue_handler.addFilter(RunContextFilter(service, settings.env))

    _listener = QueueListener(q, stream_handler)
    _listener.start()

    root.handlers = [queue_handler]

    # psycopg is chatty on DEBUG
    logging.getLogger("psycopg").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("logger_initialized")


def shutdown_logging() -> None:
    """Stop the queue listener, flushing pending records."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
