"""
Structured logging for vector store operations.
"""

import logging
from typing import Any, Dict


def _truncate(text: str, limit: int = 50) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class StructuredLogger:
    """Structured logger for vector insert, load and query operations."""

    def __init__(self, name: str = "embedding_store"):
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

        self.logger.info(message)

    def log_vector_operation(self, operation: str, record_id: Any, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector operation."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)
            if isinstance(log_details.get("label"), str):
                log_details["label"] = _truncate(log_details["label"])

        self.log_operation(f"vector.{operation}", status, log_details)

    def log_query(self, record_count: int, k: int, start_time: float, end_time: float, status: str = "success", details: Dict[str, Any] = None):
        """Log a top-k query with its duration."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {"records_scanned": record_count, "k": k, "duration_ms": duration_ms}
        if details:
            log_details.update(details)

        self.log_operation("vector.query", status, log_details)

    def log_vector_error(self, operation: str, error: Exception, details: Dict[str, Any] = None):
        """Log a vector error before it is re-raised to the caller."""
        log_details = {"error_type": type(error).__name__, "error": str(error)[:100]}
        if details:
            log_details.update(details)
            if isinstance(log_details.get("label"), str):
                log_details["label"] = _truncate(log_details["label"])

        message = f"Operation: vector.{operation}, Status: failed, Details: {log_details}"
        self.logger.error(message)


# Global logger instance
logger = StructuredLogger()
