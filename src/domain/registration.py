"""
Registration domain service - Account creation and first code issuance.

Account Status Machine (Forward-Only Transitions)
=================================================

States:
- AWAITING_VALIDATION: Initial state after registration (code sent by email)
- EMAIL_VALIDATED: Terminal state after the code is validated

Valid Transitions:
    AWAITING_VALIDATION -> EMAIL_VALIDATED   (ValidateCodeService only)

Invalid Transitions (never allowed):
    EMAIL_VALIDATED -> any

Verification codes are never persisted. They live in the CodeCache keyed
by email and disappear when their TTL runs out.
"""

import logging
from dataclasses import dataclass

from .credentials import generate_verification_code, hash_password
from .errors import DomainError, already_exists
from .exceptions import EmailAlreadyClaimed
from .mail import build_verification_message
from .ports import Account, AccountRepository, AccountStatus, CodeCache, EmailSender
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class RegistrationService:
    """
    Domain service for account registration.

    Orchestrates the registration flow: duplicate check, password hashing,
    account persistence, code generation and delivery.
    """

    repository: AccountRepository
    email_sender: EmailSender
    cache: CodeCache
    mail_from: str
    code_ttl_seconds: int = 3600
    code_digits: int = 6
    bcrypt_cost: int = 10

    def register(self, name: str, email: str, phone: str, password: str) -> Result[DomainError, Account]:
        """
        Register a new account and send its verification code.

        The steps are not atomic. A failed email delivery is logged but
        does not undo the account or the cached code; the user can ask
        for a resend.

        Args:
            name: Display name
            email: Email address (will be normalized)
            phone: Phone number
            password: Plaintext password (will be hashed)

        Returns:
            Success(created account) or Failure(ALREADY_EXISTS)
        """
        normalized_email = normalize_email(email)

        logger.info("Verifying if account '%s' exists", normalized_email)
        if self.repository.exists(email=normalized_email):
            logger.warning("Account '%s' already exists", normalized_email)
            return Failure(already_exists(normalized_email))

        logger.info("Registering account '%s'", normalized_email)
        candidate = Account(
            name=name,
            email=normalized_email,
            phone=phone,
            password_hash=hash_password(password, rounds=self.bcrypt_cost),
            status=AccountStatus.AWAITING_VALIDATION,
        )
        try:
            account = self.repository.create(candidate)
        except EmailAlreadyClaimed:
            # Lost a concurrent registration race on the unique constraint
            logger.warning("Account '%s' was registered concurrently", normalized_email)
            return Failure(already_exists(normalized_email))

        logger.info("Generating a verification code for '%s'", normalized_email)
        code = generate_verification_code(self.code_digits)
        self.cache.set(normalized_email, code, self.code_ttl_seconds)

        logger.info("Sending code to the email '%s'", normalized_email)
        message = build_verification_message(self.mail_from, account.name, normalized_email, code)
        if not self.email_sender.send(message):
            logger.warning(
                "Verification email to '%s' was not delivered; account kept, resend required",
                normalized_email,
            )

        logger.info(
            "Account '%s' registered successfully, status: %s",
            normalized_email,
            account.status.label,
        )
        return Success(account)
