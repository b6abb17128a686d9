"""
Logging infrastructure for scorecard command-line runs.

Provides:
- Structured logging with timestamps
- Different log levels (DEBUG, INFO, WARNING, ERROR)
- File and console output
- Error tracking and reporting

Library modules log through logging.getLogger(__name__); ScorecardLogger
installs the shared format on the root logger so those records line up with
its own output.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional


class MillisecondsFormatter(logging.Formatter):
    """Custom formatter that includes milliseconds and aligns log levels."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        """Override formatTime to include milliseconds."""
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            s = ct.strftime(datefmt.replace(",%f", ""))
            return s + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        else:
            return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


class ScorecardLogger:
    """
    Centralized logger for scorecard runs with structured output.
    """

    def __init__(
        self,
        name: str = "scorecard",
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
    ):
        """
        Initialize the scorecard logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional log file name
            log_dir: Directory for log files (defaults to logs/)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, log_level.upper()))

        # Prevent propagation to root logger to avoid duplicate logs
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        fmt_str = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"

        # Console goes to stderr so report output on stdout stays machine-readable
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_formatter = MillisecondsFormatter(fmt_str, datefmt="%Y-%m-%d %H:%M:%S,%f")
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            if log_dir is None:
                log_dir = Path(__file__).parent.parent.parent / "logs"

            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / log_file

            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(logging.DEBUG)  # Log everything to file
            file_formatter = MillisecondsFormatter(fmt_str, datefmt="%Y-%m-%d %H:%M:%S,%f")
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

            self.info(f"Logging to file: {log_path}")

        self._configure_library_loggers(log_level, console_formatter)

        # Track errors for summary reporting
        self.errors = []
        self.warnings = []

    def _configure_library_loggers(self, log_level: str, formatter: logging.Formatter):
        """Route records from scorecard library modules through the unified format."""
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))
        root_logger.handlers.clear()

        root_handler = logging.StreamHandler(sys.stderr)
        root_handler.setLevel(getattr(logging, log_level.upper()))
        root_handler.setFormatter(formatter)
        root_logger.addHandler(root_handler)

    def _format(self, message: str, kwargs: dict) -> str:
        if kwargs:
            formatted_data = " ".join(f"{k}={v}" for k, v in kwargs.items())
            message = f"{message} [{formatted_data}]"
        return message

    def debug(self, message: str, **kwargs):
        """Log debug message with optional structured data."""
        self.logger.debug(self._format(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        """Log info message with optional structured data."""
        self.logger.info(self._format(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message and track for reporting."""
        message = self._format(message, kwargs)
        self.logger.warning(message, stacklevel=2)
        self.warnings.append(
            {
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message and track for reporting."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        message = self._format(message, kwargs)

        self.logger.error(message, exc_info=exception is not None, stacklevel=2)
        self.errors.append(
            {
                "message": message,
                "exception": str(exception) if exception else None,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def log_weight_validation(self, goal_id: str, total: float, should_block: bool, message: str):
        """Log the outcome of a contribution weight check."""
        if should_block:
            self.warning(f"Weight edit must be refused: {message}", goal_id=goal_id, total=total)
        else:
            self.info(message, goal_id=goal_id, total=total)

    @contextmanager
    def time_operation(self, operation: str, **context):
        """
        Context manager to time and log a scoring operation.

        Usage:
            with logger.time_operation("report", snapshot="plan.yaml"):
                # ... build report ...
        """
        start_time = datetime.now()
        self.debug(f"Starting {operation}", **context)
        try:
            yield
            duration = (datetime.now() - start_time).total_seconds()
            self.info(f"Completed {operation}", duration_seconds=round(duration, 3), **context)
        except Exception as e:
            duration = (datetime.now() - start_time).total_seconds()
            self.error(f"Failed {operation}", exception=e, duration_seconds=round(duration, 3), **context)
            raise

    def get_error_summary(self) -> dict:
        """Get summary of errors and warnings for reporting."""
        return {
            "total_errors": len(self.errors),
            "total_warnings": len(self.warnings),
            "errors": self.errors,
            "warnings": self.warnings,
        }
