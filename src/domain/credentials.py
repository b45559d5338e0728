"""
Credential helpers - Password hashing, verification codes and tokens.

Pure functions with no service state, so any service (registration,
authentication) can hash a password or issue a token without depending
on another service.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

DEFAULT_ALGORITHM = "HS256"


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash password using bcrypt (salted, one-way).

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor

    Returns:
        bcrypt hash as text
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def compare_passwords(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a bcrypt hash (constant-time)."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        return False


def generate_verification_code(digits: int = 6) -> str:
    """
    Generate a cryptographically random numeric code.

    The first digit is never zero, so the code always has exactly
    `digits` significant digits (100000-999999 for 6 digits).
    """
    low = 10 ** (digits - 1)
    high = 10**digits - 1
    return str(low + secrets.randbelow(high - low + 1))


def generate_token(
    sub: str,
    secret: str,
    expires_in_seconds: int,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """
    Issue a signed JWT whose subject is the account id.

    Args:
        sub: Account id
        secret: HMAC signing secret
        expires_in_seconds: Lifetime of the token
        algorithm: JWS algorithm

    Returns:
        Encoded token
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in_seconds),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> dict[str, Any]:
    """
    Verify a token's signature and expiry and return its payload.

    Raises:
        jwt.InvalidTokenError: On bad signature, expiry or missing subject
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require": ["sub", "exp"]},
    )
