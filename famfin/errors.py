"""
Error taxonomy for the API.

Handlers raise these; ``famfin.main`` turns them into JSON responses of the
form ``{"message": ...}`` with the matching status code.
"""

from fastapi import status


class FamFinError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(FamFinError):
    """Missing or invalid field, unknown row, or a role that may not do this."""

    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(FamFinError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(FamFinError):
    status_code = status.HTTP_403_FORBIDDEN
