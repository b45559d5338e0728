"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account registration state machine, the
verification code rules and the authentication gate. It defines its own
port interfaces for infrastructure abstraction, ensuring true hexagonal
architecture decoupling.
"""

from .account_info import GetAccountInfoService
from .authentication import AuthService, TokenResponse
from .errors import DomainError, ErrorKind
from .exceptions import EmailAlreadyClaimed, RegistrationError
from .ports import Account, AccountRepository, AccountStatus, CodeCache, EmailSender, MailMessage
from .registration import RegistrationService
from .resend import ResendCodeService
from .result import Failure, Result, Success
from .validation import ValidateCodeService

__all__ = [
    "Account",
    "AccountRepository",
    "AccountStatus",
    "AuthService",
    "CodeCache",
    "DomainError",
    "EmailAlreadyClaimed",
    "EmailSender",
    "ErrorKind",
    "Failure",
    "GetAccountInfoService",
    "MailMessage",
    "RegistrationError",
    "RegistrationService",
    "ResendCodeService",
    "Result",
    "Success",
    "TokenResponse",
    "ValidateCodeService",
]
