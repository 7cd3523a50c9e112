"""Application middleware package."""

from .logging import REQUEST_ID_HEADER, StructuredLoggingMiddleware

__all__ = ["REQUEST_ID_HEADER", "StructuredLoggingMiddleware"]
