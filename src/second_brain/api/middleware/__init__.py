"""API middleware."""

from second_brain.api.middleware.error_handler import ErrorHandlerMiddleware
from second_brain.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
