"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class InvalidInputError(ValueError):
    """Raised when a record or date violates the input contract."""
    pass
