"""
Unit tests for API request/response models.

Tests Pydantic model validation for the registration endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import AuthRequest, ConfirmRequest, RegisterRequest, ResendRequest


class TestRegisterRequest:
    def test_valid_register_request(self) -> None:
        request = RegisterRequest(
            name="John", email="john@mail.com", phone="(11) 99999-9999", password="secure123"
        )
        assert request.email == "john@mail.com"
        assert request.phone == "(11) 99999-9999"

    def test_phone_is_optional(self) -> None:
        request = RegisterRequest(name="John", email="john@mail.com", password="secure123")
        assert request.phone == ""

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(name="John", email="not-an-email", password="secure123")
        assert "email" in str(exc_info.value)

    def test_password_minimum_length(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(name="John", email="john@mail.com", password="short")
        assert "password" in str(exc_info.value)

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="john@mail.com", password="secure123")


class TestConfirmRequest:
    def test_code_kept_verbatim(self) -> None:
        request = ConfirmRequest(email="john@mail.com", code="012345 ")
        assert request.code == "012345 "

    def test_numeric_code_rejected(self) -> None:
        """Strict string field: a JSON number is not coerced into a code."""
        with pytest.raises(ValidationError):
            ConfirmRequest(email="john@mail.com", code=123456)


class TestOtherRequests:
    def test_resend_requires_valid_email(self) -> None:
        with pytest.raises(ValidationError):
            ResendRequest(email="nope")

    def test_auth_request(self) -> None:
        request = AuthRequest(email="john@mail.com", password="x")
        assert request.password == "x"
