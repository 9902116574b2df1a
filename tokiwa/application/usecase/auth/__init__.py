"""Authentication use cases."""

from .oauth_login import OAuthLoginRequest, OAuthLoginUseCase
from .password_login import PasswordLoginRequest, PasswordLoginUseCase
from .session import SessionResponse
from .signup import SignupRequest, SignupResponse, SignupUseCase

__all__ = [
    "OAuthLoginRequest",
    "OAuthLoginUseCase",
    "PasswordLoginRequest",
    "PasswordLoginUseCase",
    "SessionResponse",
    "SignupRequest",
    "SignupResponse",
    "SignupUseCase",
]
