"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repository and code cache with a controllable clock
- A recording email sender
- Domain services wired the way the composition root wires them
"""

import pytest

from src.adapters.cache.memory import InMemoryCodeCache
from src.adapters.repository.memory import InMemoryAccountRepository
from src.config.settings import Settings
from src.domain.account_info import GetAccountInfoService
from src.domain.authentication import AuthService
from src.domain.mail import verification_code_in
from src.domain.ports import MailMessage
from src.domain.registration import RegistrationService
from src.domain.resend import ResendCodeService
from src.domain.validation import ValidateCodeService

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!!"
MAIL_FROM = "no-reply@test.local"
CODE_TTL = 60


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingEmailSender:
    """EmailSender that keeps every message and can simulate failures."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.messages: list[MailMessage] = []

    def send(self, message: MailMessage) -> bool:
        self.messages.append(message)
        return self.succeed

    @property
    def last_code(self) -> str:
        code = verification_code_in(self.messages[-1].body)
        assert code is not None
        return code


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: memory backend and a cheap bcrypt cost."""
    return Settings(
        _env_file=None,
        repository_backend="memory",
        mail_backend="console",
        bcrypt_cost=4,
        code_ttl_seconds=CODE_TTL,
        token_secret=TEST_SECRET,
        token_expires_in_seconds=300,
        mail_from=MAIL_FROM,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCodeCache:
    return InMemoryCodeCache(clock=clock)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def registration_service(
    repository: InMemoryAccountRepository,
    sender: RecordingEmailSender,
    cache: InMemoryCodeCache,
) -> RegistrationService:
    return RegistrationService(
        repository=repository,
        email_sender=sender,
        cache=cache,
        mail_from=MAIL_FROM,
        code_ttl_seconds=CODE_TTL,
        bcrypt_cost=4,
    )


@pytest.fixture
def resend_service(
    repository: InMemoryAccountRepository,
    sender: RecordingEmailSender,
    cache: InMemoryCodeCache,
) -> ResendCodeService:
    return ResendCodeService(
        repository=repository,
        email_sender=sender,
        cache=cache,
        mail_from=MAIL_FROM,
        code_ttl_seconds=CODE_TTL,
    )


@pytest.fixture
def validate_service(
    repository: InMemoryAccountRepository, cache: InMemoryCodeCache
) -> ValidateCodeService:
    return ValidateCodeService(repository=repository, cache=cache)


@pytest.fixture
def auth_service(repository: InMemoryAccountRepository) -> AuthService:
    return AuthService(repository=repository, token_secret=TEST_SECRET, token_expires_in_seconds=300)


@pytest.fixture
def account_info_service(repository: InMemoryAccountRepository) -> GetAccountInfoService:
    return GetAccountInfoService(repository=repository)
