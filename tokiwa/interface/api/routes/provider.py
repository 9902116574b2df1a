"""Provider identifiers as they appear in request bodies."""

from typing import Annotated

from pydantic import BeforeValidator

from tokiwa.domain.value import ProviderKind


def _parse_provider(value: object) -> ProviderKind:
    if isinstance(value, ProviderKind):
        return value
    if not isinstance(value, str):
        raise ValueError("provider must be a string")
    return ProviderKind.parse(value)


# Accepts "google.com" as well as "google"
ProviderField = Annotated[ProviderKind, BeforeValidator(_parse_provider)]
