from .base import AppError, DomainError, ValidationError
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
