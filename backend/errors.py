"""
Error taxonomy for the API.

Every error is rendered by main.py as {"error": message} with its status code.
"""

from typing import Optional


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class InvalidSession(Unauthorized):
    message = "Invalid session"


class NotFound(AppError):
    status_code = 404
    message = "Product not found"


class InternalError(AppError):
    pass
