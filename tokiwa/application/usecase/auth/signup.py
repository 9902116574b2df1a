"""Password signup use case."""

import logfire
from pydantic import BaseModel

from tokiwa.application.usecase.base import BaseUseCase, CamelModel
from tokiwa.domain.error import ConflictError, NotFoundError, StoreError, ValidationError
from tokiwa.domain.service import AccountLinker, AuthService, IdentityResolver
from tokiwa.domain.value import EmailAddress, ProviderKind


def check_password_strength(password: str, min_length: int) -> None:
    """Enforce the signup password policy.

    Raises:
        ValidationError: Naming the first rule the password breaks
    """
    if len(password) < min_length:
        raise ValidationError(
            f"password must be at least {min_length} characters", field="password"
        )
    if not any(c.isupper() for c in password):
        raise ValidationError(
            "password must contain an uppercase letter", field="password"
        )
    if not any(c.islower() for c in password):
        raise ValidationError(
            "password must contain a lowercase letter", field="password"
        )
    if not any(c.isdigit() for c in password):
        raise ValidationError("password must contain a digit", field="password")


class SignupRequest(BaseModel):
    """Signup request."""

    email: EmailAddress
    password: str


class SignupResponse(CamelModel):
    """Signup response."""

    uid: str
    email: str
    message: str = "account created"


class SignupUseCase(BaseUseCase):
    """Use case for creating an email/password account."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        account_linker: AccountLinker,
        min_password_length: int,
    ) -> None:
        """Initialize signup use case.

        Args:
            auth_service: Authentication domain service
            identity_resolver: Identity lookup service
            account_linker: Binding mutation service
            min_password_length: Minimum accepted password length
        """
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.account_linker = account_linker
        self.min_password_length = min_password_length

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Execute signup flow.

        Steps:
        1. Check the password policy
        2. Refuse emails already held by any stored identity
        3. Create the account in the password backend (its uid becomes
           the identity uid)
        4. Create the identity with a single password binding

        Raises:
            ValidationError: If the password breaks the policy
            ConflictError: If an identity or backend account already uses
                the email
        """
        check_password_strength(request.password, self.min_password_length)
        email = request.email.root

        with logfire.span("signup.execute"):
            await self._ensure_email_unclaimed(email)

            account = await self.auth_service.create_password_account(
                email, request.password
            )

            try:
                await self.account_linker.merge_login(
                    account.uid, ProviderKind.PASSWORD, account.uid, account.email
                )
            except StoreError as e:
                # The backend account exists; the next login retries the merge
                logfire.error(
                    "Identity creation failed after signup",
                    uid=account.uid,
                    error=str(e),
                )

            return SignupResponse(uid=account.uid, email=account.email)

    async def _ensure_email_unclaimed(self, email: str) -> None:
        # Emails held by OAuth identities count as taken too
        try:
            existing = await self.identity_resolver.resolve_by_email(email)
        except NotFoundError:
            return
        logfire.warn("Signup email already linked", uid=existing.uid)
        raise ConflictError("an account with this email already exists")
