"""
Domain errors - Enumerable failure outcomes returned as data.

Each ErrorKind is a tagged variant with a stable code and a message
template. DomainError binds a kind to the parameter interpolated into its
message. The HTTP status for each kind comes from a fixed lookup table.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Expected failure variants of the registration flow."""

    ALREADY_EXISTS = "ALREADY_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    STEP_ALREADY_DONE = "STEP_ALREADY_DONE"
    EXPIRED = "EXPIRED"
    INVALID = "INVALID"
    UNAUTHORIZED = "UNAUTHORIZED"
    EMAIL_CONFIRMATION_PENDING = "EMAIL_CONFIRMATION_PENDING"


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.ALREADY_EXISTS: "Account {parameter} already exists.",
    ErrorKind.NOT_FOUND: "Account {parameter} not found.",
    ErrorKind.STEP_ALREADY_DONE: "Step done.",
    ErrorKind.EXPIRED: "Code expired. Please, resend the code.",
    ErrorKind.INVALID: "Code '{parameter}' invalid. Please, verify the code sent.",
    ErrorKind.UNAUTHORIZED: "Invalid email and/or password.",
    ErrorKind.EMAIL_CONFIRMATION_PENDING: "Email confirmation pending.",
}

STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STEP_ALREADY_DONE: 410,
    ErrorKind.EXPIRED: 410,
    ErrorKind.INVALID: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.EMAIL_CONFIRMATION_PENDING: 412,
}

# Uncaught / infrastructure faults
SERVER_ERROR_STATUS = 500
SERVER_ERROR_MESSAGE = "An unexpected error occurred on the server"


@dataclass(frozen=True)
class DomainError:
    """
    A domain failure with its interpolation parameter.

    Attributes:
        kind: The failure variant
        parameter: Value shown in the message (email, submitted code...)
    """

    kind: ErrorKind
    parameter: str = ""

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind].format(parameter=self.parameter)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def already_exists(email: str) -> DomainError:
    return DomainError(ErrorKind.ALREADY_EXISTS, email)


def not_found(parameter: str) -> DomainError:
    return DomainError(ErrorKind.NOT_FOUND, parameter)


def step_already_done() -> DomainError:
    return DomainError(ErrorKind.STEP_ALREADY_DONE)


def expired() -> DomainError:
    return DomainError(ErrorKind.EXPIRED)


def invalid(code: str) -> DomainError:
    return DomainError(ErrorKind.INVALID, code)


def unauthorized() -> DomainError:
    return DomainError(ErrorKind.UNAUTHORIZED)


def email_confirmation_pending() -> DomainError:
    return DomainError(ErrorKind.EMAIL_CONFIRMATION_PENDING)
