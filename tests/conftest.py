"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment when containers are built, so the
# defaults must be in place before any test module imports the app
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault(
    "AUTH__SESSION_SECRET", "test-session-secret-0123456789abcdef0123"
)

logfire.configure(send_to_logfire=False, console=False)

TEST_SECRET = os.environ["AUTH__SESSION_SECRET"]
