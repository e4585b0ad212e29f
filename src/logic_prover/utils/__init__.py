"""
Utility functions and helpers
"""

from .response import (
    success_response,
    error_response,
    validation_error_response,
    internal_error_response,
    options_response
)

__all__ = [
    "success_response",
    "error_response",
    "validation_error_response",
    "internal_error_response",
    "options_response"
]
