"""
Error taxonomy shared by the communications core.
"""

from __future__ import annotations

from enum import Enum


LOCAL_ERROR_CODE = -1


class ErrorKind(str, Enum):
    LOCAL = "local"
    TRANSPORT = "transport"


def is_transport_status(code: int) -> bool:
    return 400 <= code <= 599


class CommsError(Exception):
    """
    Raised when a communications operation fails.

    A code of -1 marks a failure that never reached (or never came back from)
    the remote service: missing configuration, unparsable payloads, missing
    response fields, broken cache, or an unauthenticated post. Any code in
    400-599 is the HTTP status reported by the remote service.
    """

    def __init__(self, code: int, message: str) -> None:
        if code != LOCAL_ERROR_CODE and not is_transport_status(code):
            raise ValueError(f"Invalid communications error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def local(cls, message: str) -> "CommsError":
        return cls(LOCAL_ERROR_CODE, message)

    @property
    def kind(self) -> ErrorKind:
        if self.code == LOCAL_ERROR_CODE:
            return ErrorKind.LOCAL
        return ErrorKind.TRANSPORT

    def __str__(self) -> str:
        return f"Communications Error {self.code} | {self.message}"


class CacheError(Exception):
    """
    Raised when the content cache cannot be brought up at all.
    """

    def __init__(self, message: str, critical: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.critical = critical

    def __str__(self) -> str:
        if self.critical:
            return f"CRITICAL Database Error | {self.message}"
        return f"Database Error | {self.message}"
