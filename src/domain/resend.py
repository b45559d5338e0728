"""
Resend domain service - Reissue or reuse a pending verification code.
"""

import logging
from dataclasses import dataclass

from .credentials import generate_verification_code
from .errors import DomainError, not_found, step_already_done
from .mail import build_verification_message
from .ports import AccountRepository, AccountStatus, CodeCache, EmailSender
from .registration import normalize_email
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


@dataclass
class ResendCodeService:
    """
    Sends the verification code again for an account awaiting validation.

    A code still in the cache is reused as-is (its TTL is not refreshed) so
    that a code the user already received stays valid. A new code is only
    generated once the previous one has expired.
    """

    repository: AccountRepository
    email_sender: EmailSender
    cache: CodeCache
    mail_from: str
    code_ttl_seconds: int = 3600
    code_digits: int = 6

    def resend(self, email: str) -> Result[DomainError, bool]:
        """
        Args:
            email: Account email (will be normalized)

        Returns:
            Success(True), Failure(NOT_FOUND) or Failure(STEP_ALREADY_DONE)
        """
        normalized_email = normalize_email(email)

        logger.info("Verifying if account exists with '%s'", normalized_email)
        account = self.repository.find_one(email=normalized_email)
        if account is None:
            logger.warning("There is no account with '%s'", normalized_email)
            return Failure(not_found(normalized_email))

        if account.status != AccountStatus.AWAITING_VALIDATION:
            logger.warning("Step done for '%s'", normalized_email)
            return Failure(step_already_done())

        logger.info("Getting code from cache for '%s'", normalized_email)
        code = self.cache.get(normalized_email)
        if code is None:
            logger.info("Generating a new validation code for '%s'", normalized_email)
            code = generate_verification_code(self.code_digits)
            self.cache.set(normalized_email, code, self.code_ttl_seconds)
        else:
            logger.info("Reusing cached validation code for '%s'", normalized_email)

        message = build_verification_message(self.mail_from, account.name, normalized_email, code)
        if not self.email_sender.send(message):
            logger.warning("Verification email to '%s' was not delivered", normalized_email)

        return Success(True)
