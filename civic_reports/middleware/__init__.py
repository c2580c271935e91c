"""Request logging and error translation for the HTTP app."""

from .error_handler import register_exception_handlers
from .logging import REQUEST_ID_HEADER, logging_middleware

__all__ = [
    "REQUEST_ID_HEADER",
    "logging_middleware",
    "register_exception_handlers",
]
