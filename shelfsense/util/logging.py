"""
Structured operation logging for catalog loads, classifications and suggestions.
"""

import logging
from typing import Any, Dict, Optional


def _truncate(text: str, limit: int = 50) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class StructuredLogger:
    """Structured logger for engine and service operations."""

    def __init__(self, name: str = "shelfsense"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "error"):
            self.logger.error(message)
        elif status in ("degraded", "fallback"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_catalog_load(self, source: str, size: int, dimension: int, status: str = "success", details: Dict[str, Any] = None):
        """Log a catalog build."""
        log_details = {"source": source, "size": size, "dimension": dimension}
        if details:
            log_details.update(details)

        self.log_operation("catalog.load", status, log_details)

    def log_classification(self, text: str, category: str, confidence: float, method: str = "embedding"):
        """Log a classification outcome."""
        log_details = {
            "text": _truncate(text),
            "category": category,
            "confidence": round(confidence, 4),
            "method": method
        }
        status = "fallback" if method == "lexical_fallback" else "success"
        self.log_operation("classify", status, log_details)

    def log_suggestion(self, text: str, count: int, mode: str):
        """Log an autocomplete request."""
        log_details = {"text": _truncate(text), "count": count, "mode": mode}
        self.log_operation("suggest", "success", log_details)

    def log_encoder_failure(self, operation: str, error: Exception, text: Optional[str] = None):
        """Log an encoder failure that was recovered from."""
        log_details = {"error": str(error)[:100]}
        if text is not None:
            log_details["text"] = _truncate(text)

        self.log_operation(f"encoder.{operation}", "degraded", log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
