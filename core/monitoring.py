"""Error reporting sink for best-effort failures."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorReporter(ABC):
    """Collects errors that were contained instead of propagated."""

    @abstractmethod
    def report_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        pass


class LoggingErrorReporter(ErrorReporter):
    """Reports through the standard logging pipeline. Never raises."""

    def __init__(self, logger_name: str = "ats.errors"):
        self._logger = logging.getLogger(logger_name)

    def report_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        try:
            self._logger.error(
                f"{error.__class__.__name__}: {error} | context={context or {}}",
                exc_info=(type(error), error, error.__traceback__)
            )
        except Exception as e:
            logger.warning(f"Error reporter failed: {e}")
