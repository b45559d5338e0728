"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(default="", max_length=40)
    password: str = Field(..., min_length=8, description="Account password (min 8 characters)")


class RegisterResponse(BaseModel):
    """Response model for accepted registration."""

    status: str
    message: str
    url: str


class ConfirmRequest(BaseModel):
    """Request model for email code validation."""

    email: EmailStr
    code: str = Field(..., description="Verification code received by email")


class ResendRequest(BaseModel):
    """Request model for resending the verification code."""

    email: EmailStr


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class AuthRequest(BaseModel):
    """Request model for authentication."""

    email: EmailStr
    password: str


class TokenModel(BaseModel):
    """Response model for successful authentication."""

    token: str


class AccountInfoResponse(BaseModel):
    """Response model for the authenticated account."""

    id: str
    name: str
    email: str
    phone: str
    status: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    path: str
    code: int
    error: str
    message: str
