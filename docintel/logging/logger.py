import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Set by the job runner for the duration of one processing run.
_document_id_var: ContextVar[str | None] = ContextVar("document_id", default=None)


class Log:
    """Centralized logging; messages carry key=value fields and the bound document id."""

    _logger: logging.Logger = logging.getLogger("docintel")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [%(threadName)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def bind_document(cls, document_id: str) -> Iterator[None]:
        """Tag every message logged in this context with ``document_id``."""
        token = _document_id_var.set(document_id)
        try:
            yield
        finally:
            _document_id_var.reset(token)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(cls._format(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(cls._format(message, fields))

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log an error with the active exception's traceback."""
        cls._logger.exception(cls._format(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(cls._format(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(cls._format(message, fields))

    @staticmethod
    def _format(message: str, fields: dict[str, object]) -> str:
        document_id = _document_id_var.get()
        if document_id is not None and "document_id" not in fields:
            fields = {"document_id": document_id, **fields}
        if not fields:
            return message
        return message + " [" + ", ".join(f"{k}={v}" for k, v in fields.items()) + "]"


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self) -> None:
        self._started: float | None = None
        self.elapsed_ms: int | None = None

    def __enter__(self) -> "Timer":
        self._started = time.monotonic()
        return self

    def __exit__(self, *args: object) -> None:
        self.elapsed_ms = self.current_ms()

    def current_ms(self) -> int:
        if self.elapsed_ms is not None:
            return self.elapsed_ms
        if self._started is None:
            return 0
        return int((time.monotonic() - self._started) * 1000)
