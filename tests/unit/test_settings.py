"""Unit tests for settings, logging setup and adapter selection."""

import logging

import pytest
from pydantic import ValidationError

from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.api.main import build_email_sender
from src.config.logging_config import configure_logging
from src.config.settings import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.code_ttl_seconds == 3600
        assert settings.code_digits == 6
        assert settings.bcrypt_cost == 10
        assert settings.token_algorithm == "HS256"
        assert settings.repository_backend == "postgres"
        assert settings.cors_origins == ["*"]

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CODE_TTL_SECONDS", "120")
        monkeypatch.setenv("MAIL_BACKEND", "smtp")

        settings = Settings(_env_file=None)

        assert settings.code_ttl_seconds == 120
        assert settings.mail_backend == "smtp"

    def test_cors_origins_from_json_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", '["http://app.local", "https://app.example"]')

        settings = Settings(_env_file=None)

        assert settings.cors_origins == ["http://app.local", "https://app.example"]

    def test_non_positive_ttl_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, code_ttl_seconds=0)

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, repository_backend="mongo")


class TestEmailSenderSelection:
    def test_console_backend(self) -> None:
        assert isinstance(build_email_sender(Settings(_env_file=None)), ConsoleEmailSender)

    def test_smtp_backend(self) -> None:
        sender = build_email_sender(Settings(_env_file=None, mail_backend="smtp"))

        assert isinstance(sender, SmtpEmailSender)


class TestLogging:
    def test_configure_logging_sets_root_level(self) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)
