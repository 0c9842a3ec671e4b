from __future__ import annotations


class ValidationError(Exception):
    """Raised when a request payload is structurally unusable (maps to a 4xx)."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PayloadTooLargeError(ValidationError):
    """Raised when a request body exceeds the configured size limit."""

    status_code = 413
