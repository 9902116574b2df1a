"""Password login use case."""

import logfire
from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase
from tokiwa.domain.error import StoreError, ValidationError
from tokiwa.domain.service import (
    AccountLinker,
    AuthService,
    IdentityResolver,
    SessionService,
)
from tokiwa.domain.value import EmailAddress, ProviderKind

from .session import SessionResponse


class PasswordLoginRequest(BaseModel):
    """Password login request."""

    email: EmailAddress
    password: str


class PasswordLoginUseCase(BaseUseCase):
    """Use case for email/password login."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        session_service: SessionService,
    ) -> None:
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker
        self.session_service = session_service

    async def execute(self, request: PasswordLoginRequest) -> SessionResponse:
        """Verify the password with the backend and issue a session.

        The password binding is merged into the identity on a best-effort
        basis; a store failure is logged and does not block the session.

        Raises:
            ValidationError: If the password is empty
            AuthError: If the backend rejects the credential
        """
        if not request.password:
            raise ValidationError("password is required", field="password")

        with logfire.span("password_login.execute"):
            account = await self.auth_service.verify_password(
                request.email.root, request.password
            )

            uid = account.uid
            try:
                identity = await self.identity_resolver.resolve_or_default(uid)
                uid = identity.uid
                await self.account_linker.merge_login(
                    uid, ProviderKind.PASSWORD, account.uid, account.email
                )
            except StoreError as e:
                logfire.error(
                    "Identity merge failed after password login",
                    uid=uid,
                    error=str(e),
                )

            token = self.session_service.mint(uid, account.email)
            return SessionResponse(uid=uid, email=account.email, session_token=token)
