"""
Unit tests for ValidateCodeService.

Covers the fixed check order (not found, step done, expired, invalid),
exact string comparison and the single forward status transition.
"""

import logging
from dataclasses import replace
from unittest.mock import Mock

import pytest

from src.domain.errors import ErrorKind
from src.domain.ports import Account, AccountStatus
from src.domain.validation import ValidateCodeService


@pytest.fixture
def registered(registration_service, cache):
    """Register john@mail.com and return the cached code."""
    result = registration_service.register("John", "john@mail.com", "", "secret123")
    assert result.is_success()
    return cache.get("john@mail.com")


class TestSuccessfulValidation:
    def test_correct_code_validates(self, validate_service, repository, registered) -> None:
        result = validate_service.validate("john@mail.com", registered)

        assert result.is_success()
        assert result.value is True
        assert repository.find_one(email="john@mail.com").status == AccountStatus.EMAIL_VALIDATED

    def test_email_is_normalized(self, validate_service, registered) -> None:
        result = validate_service.validate("  JOHN@mail.com", registered)

        assert result.is_success()

    def test_repeat_validation_reports_step_done(self, validate_service, registered) -> None:
        validate_service.validate("john@mail.com", registered)

        result = validate_service.validate("john@mail.com", registered)

        assert result.is_failure()
        assert result.error.kind == ErrorKind.STEP_ALREADY_DONE
        assert result.error.status_code == 410

    def test_status_flips_exactly_once(self, registered, cache, repository) -> None:
        spy = Mock(wraps=repository)
        service = ValidateCodeService(repository=spy, cache=cache)

        service.validate("john@mail.com", registered)
        service.validate("john@mail.com", registered)

        assert spy.update.call_count == 1

    def test_code_stays_cached_after_validation(self, validate_service, cache, registered) -> None:
        validate_service.validate("john@mail.com", registered)

        assert cache.get("john@mail.com") == registered

    def test_logs_readable_status(self, validate_service, registered, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="src.domain.validation"):
            validate_service.validate("john@mail.com", registered)

        assert "status: Email Validated" in caplog.text


class TestValidationFailures:
    def test_unknown_account_not_found(self, validate_service) -> None:
        result = validate_service.validate("ghost@mail.com", "123456")

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.status_code == 404

    def test_expired_code(self, validate_service, clock, registered) -> None:
        clock.advance(61)

        result = validate_service.validate("john@mail.com", registered)

        assert result.error.kind == ErrorKind.EXPIRED
        assert result.error.status_code == 410

    def test_wrong_code_invalid(self, validate_service, repository, registered) -> None:
        wrong = "100000" if registered != "100000" else "100001"

        result = validate_service.validate("john@mail.com", wrong)

        assert result.error.kind == ErrorKind.INVALID
        assert result.error.status_code == 400
        assert wrong in result.error.message
        assert repository.find_one(email="john@mail.com").status == AccountStatus.AWAITING_VALIDATION

    def test_trailing_space_is_not_normalized(self, validate_service, registered) -> None:
        result = validate_service.validate("john@mail.com", registered + " ")

        assert result.error.kind == ErrorKind.INVALID

    def test_numeric_code_is_not_coerced(self, validate_service, registered) -> None:
        result = validate_service.validate("john@mail.com", int(registered))

        assert result.error.kind == ErrorKind.INVALID

    def test_step_done_wins_over_expired(self, validate_service, clock, registered) -> None:
        validate_service.validate("john@mail.com", registered)
        clock.advance(3600)

        result = validate_service.validate("john@mail.com", "000000")

        assert result.error.kind == ErrorKind.STEP_ALREADY_DONE

    def test_expired_wins_over_invalid(self, validate_service, clock, registered) -> None:
        clock.advance(61)

        result = validate_service.validate("john@mail.com", "not-the-code")

        assert result.error.kind == ErrorKind.EXPIRED


class TestStatusMonotonicity:
    def test_validated_account_never_returns_to_awaiting(
        self, validate_service, resend_service, registration_service, repository, registered
    ) -> None:
        validate_service.validate("john@mail.com", registered)

        # Every operation after validation leaves the status alone
        registration_service.register("John", "john@mail.com", "", "secret123")
        resend_service.resend("john@mail.com")
        validate_service.validate("john@mail.com", registered)

        assert repository.find_one(email="john@mail.com").status == AccountStatus.EMAIL_VALIDATED

    def test_repository_rejects_backward_transition(self, repository) -> None:
        account = repository.create(
            Account(name="A", email="a@mail.com", phone="", password_hash="x")
        )
        validated = repository.update(replace(account, status=AccountStatus.EMAIL_VALIDATED))

        with pytest.raises(ValueError):
            repository.update(replace(validated, status=AccountStatus.AWAITING_VALIDATION))
