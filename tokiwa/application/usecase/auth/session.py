"""Shared response for flows that end in a session."""

from tokiwa.application.usecase.base import CamelModel


class SessionResponse(CamelModel):
    """Session issued after a successful login."""

    uid: str
    email: str
    session_token: str
