"""
Validation domain service - Consume a verification code.

Checks are evaluated in a fixed order, which decides the reported error
when several conditions hold at once:

1. Account not found          -> NOT_FOUND
2. Account already validated  -> STEP_ALREADY_DONE
3. No cached code (expired)   -> EXPIRED
4. Cached code != submitted   -> INVALID
5. Otherwise the account moves to EMAIL_VALIDATED

An already validated account therefore reports STEP_ALREADY_DONE even
when the submitted code is stale or wrong.
"""

import logging
from dataclasses import dataclass, replace

from .errors import DomainError, expired, invalid, not_found, step_already_done
from .ports import AccountRepository, AccountStatus, CodeCache
from .registration import normalize_email
from .result import Failure, Result, Success

logger = logging.getLogger(__name__)


@dataclass
class ValidateCodeService:
    """Validates the emailed code and marks the account email as validated."""

    repository: AccountRepository
    cache: CodeCache

    def validate(self, email: str, code: str) -> Result[DomainError, bool]:
        """
        Validate a submitted code for an account.

        Comparison is exact string equality: no trimming, no numeric
        coercion. The cached code is left to expire on its own; the status
        guard blocks any second validation.

        Args:
            email: Account email (will be normalized)
            code: Code submitted by the user

        Returns:
            Success(True) or a Failure in the order documented above
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
        cached_code = self.cache.get(normalized_email)
        if cached_code is None:
            logger.warning("Code expired for '%s'", normalized_email)
            return Failure(expired())

        if not isinstance(code, str) or cached_code != code:
            logger.warning("Code '%s' invalid for '%s'", code, normalized_email)
            return Failure(invalid(str(code)))

        logger.info("Updating account status for '%s'", normalized_email)
        updated = self.repository.update(replace(account, status=AccountStatus.EMAIL_VALIDATED))
        logger.info("Account '%s' status: %s", normalized_email, updated.status.label)
        return Success(True)
