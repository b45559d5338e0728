"""
Authentication domain service - Credentials to signed token.

Unknown email and wrong password produce the same UNAUTHORIZED error so
the response does not reveal which accounts exist. The pending email
confirmation is only reported once the password has been verified.
"""

import logging
from dataclasses import dataclass

from .credentials import DEFAULT_ALGORITHM, compare_passwords, generate_token
from .errors import DomainError, email_confirmation_pending, unauthorized
from .ports import AccountRepository, AccountStatus
from .registration import normalize_email
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenResponse:
    """Issued access token."""

    token: str


@dataclass
class AuthService:
    """Authenticates an account and issues a JWT carrying its id as subject."""

    repository: AccountRepository
    token_secret: str
    token_expires_in_seconds: int = 86400
    token_algorithm: str = DEFAULT_ALGORITHM

    def authenticate(self, email: str, password: str) -> Result[DomainError, TokenResponse]:
        """
        Args:
            email: Account email (will be normalized)
            password: Plaintext password

        Returns:
            Success(TokenResponse), Failure(UNAUTHORIZED) or
            Failure(EMAIL_CONFIRMATION_PENDING)
        """
        normalized_email = normalize_email(email)

        logger.info("Authenticating account '%s'", normalized_email)
        account = self.repository.find_one(email=normalized_email)
        if account is None:
            logger.warning("There is no account with '%s'", normalized_email)
            return Failure(unauthorized())

        if not compare_passwords(password, account.password_hash):
            logger.warning("Account password does not match for '%s'", normalized_email)
            return Failure(unauthorized())

        if account.status == AccountStatus.AWAITING_VALIDATION:
            logger.warning("Email confirmation pending for '%s'", normalized_email)
            return Failure(email_confirmation_pending())

        token = generate_token(
            str(account.id),
            self.token_secret,
            self.token_expires_in_seconds,
            algorithm=self.token_algorithm,
        )
        logger.info("Account '%s' authenticated successfully", normalized_email)
        return Success(TokenResponse(token=token))
