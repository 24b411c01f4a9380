import logging
import sys
import time


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("ingredex")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)


class Timer:
    """Context manager for timing operations."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.start_time: float | None = None
        self.elapsed_ms: int | None = None

    def __enter__(self) -> "Timer":
        self.start_time = time.monotonic()
        return self

    def __exit__(self, *args: object) -> None:
        if self.start_time is not None:
            self.elapsed_ms = int((time.monotonic() - self.start_time) * 1000)

    def get_elapsed_ms(self) -> int:
        """Elapsed milliseconds, live while the block is still running."""
        if self.elapsed_ms is not None:
            return self.elapsed_ms
        if self.start_time is not None:
            return int((time.monotonic() - self.start_time) * 1000)
        return 0
