"""Closed error taxonomy shared by services, guards and the HTTP boundary."""

from enum import Enum


class ErrorKind(str, Enum):
    """Every failure the core can report. The HTTP layer maps each to a status code."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BAD_REQUEST = "bad_request"


# Status codes used by the exception handler registered in app.main.
HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.BAD_REQUEST: 400,
}


class ServiceError(Exception):
    """Raised at the point of detection and propagated unchanged to the request boundary."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


def unauthorized(message: str = "Not authenticated") -> ServiceError:
    return ServiceError(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str = "Forbidden") -> ServiceError:
    return ServiceError(ErrorKind.FORBIDDEN, message)


def not_found(message: str = "Not found") -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)


def conflict(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)


def bad_request(message: str) -> ServiceError:
    return ServiceError(ErrorKind.BAD_REQUEST, message)
