import logging
import traceback
from collections import deque
from typing import Any, Deque, Dict

LOGGER_NAME = "codenotes"
MAX_KEPT_ERRORS = 100
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the project logger once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


class ErrorHandler:
    """Log store failures with their context and keep them for a summary.

    Only the latest ``max_errors`` entries are kept; the counts cover every
    failure since the last :meth:`clear_errors`.
    """

    def __init__(self, logger: logging.Logger | None = None, *, max_errors: int = MAX_KEPT_ERRORS):
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.errors: Deque[Dict[str, Any]] = deque(maxlen=max_errors)
        self._error_types: Dict[str, int] = {}
        self._operations: Dict[str, int] = {}
        self._total = 0

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> Dict[str, Any]:
        """Process and log error with context information."""
        error_info = {
            "type": type(error).__name__,
            "message": getattr(error, "message", None) or str(error),
            "context": context,
            "traceback": traceback.format_exc() if self.logger.isEnabledFor(logging.DEBUG) else None,
        }

        self.logger.error(
            "%s: %s | Context: %s", error_info["type"], error_info["message"], context
        )

        self.errors.append(error_info)
        self._total += 1
        self._error_types[error_info["type"]] = self._error_types.get(error_info["type"], 0) + 1
        operation = context.get("operation", "unknown")
        self._operations[operation] = self._operations.get(operation, 0) + 1
        return error_info

    def collect_store_error(self, error: Exception, operation: str, **details: Any) -> Dict[str, Any]:
        """Collect a failed store request for ``operation`` (probe, create, list, delete)."""
        context = {"operation": operation, **details}
        return self.handle_error(error, context)

    def get_error_summary(self) -> Dict[str, Any]:
        return {
            "total_errors": self._total,
            "error_types": dict(self._error_types),
            "operations": dict(self._operations),
        }

    def clear_errors(self):
        self.errors.clear()
        self._error_types.clear()
        self._operations.clear()
        self._total = 0

    def format_error_report(self) -> str:
        """Format user-friendly error report."""
        summary = self.get_error_summary()

        if summary["total_errors"] == 0:
            return ""

        lines = [
            f"\n⚠️  Error Summary: {summary['total_errors']} errors occurred",
            "",
        ]

        if summary["operations"]:
            lines.append("Failed Operations:")
            for operation, count in summary["operations"].items():
                lines.append(f"  • {operation}: {count}")
            lines.append("")

        recent = list(self.errors)[-5:]
        lines.append("Recent Errors:")
        for error in recent:
            lines.append(f"  • {error['type']}: {error['message']}")

        if summary["total_errors"] > len(recent):
            lines.append(f"  ... and {summary['total_errors'] - len(recent)} earlier")

        return "\n".join(lines)


__all__ = ["ErrorHandler", "configure_logging", "LOGGER_NAME", "MAX_KEPT_ERRORS"]
