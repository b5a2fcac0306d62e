"""
Error kinds shared by the API layer and the job stores.

Every failure is raised as an ApiError and turned into a JSON envelope by
the single exception handler registered in main.py.
"""
from enum import Enum
from typing import List, Union


class ErrorKind(Enum):
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    INTERNAL = 500

    @property
    def status_code(self) -> int:
        return self.value


class ApiError(Exception):
    """Failure with a kind (which fixes the status code) and a client-facing message"""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: Union[str, List[str]] = "Internal Server Error"):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_envelope(self) -> dict:
        return {"error": {"message": self.message, "status": self.status_code}}


class BadRequestError(ApiError):
    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(ApiError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)
