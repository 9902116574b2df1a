"""Mappers between stored identity documents and domain models.

The document keeps the field names clients already consume:

    { userName, userColor, uid,
      email:   [ { emailAddress, userUID } ],
      google:  [ { userUID, emailAddress } ],
      github:  [ { userUID, emailAddress } ],
      twitter: [ { userUID, emailAddress } ] }
"""

from typing import Any, Dict

from tokiwa.domain.model.identity import DEFAULT_USER_COLOR, Identity, ProviderBinding
from tokiwa.domain.value import ProviderKind


def identity_to_document(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to its stored document.

    Args:
        identity: Identity domain model

    Returns:
        JSON-serializable document (version is stored alongside, not inside)
    """
    document: Dict[str, Any] = {
        "userName": identity.user_name,
        "userColor": identity.user_color,
        "uid": identity.uid,
    }
    for kind in ProviderKind:
        document[kind.document_field] = [
            {"userUID": b.provider_uid, "emailAddress": b.email}
            for b in identity.bindings(kind)
        ]
    return document


def document_to_identity(document: Dict[str, Any], version: int) -> Identity:
    """Convert a stored document to an Identity domain model.

    Missing lists and profile fields fall back to defaults so documents
    written before a provider existed still load.

    Args:
        document: Stored document
        version: Row version

    Returns:
        Identity domain model
    """
    bindings = {
        kind.value: tuple(
            ProviderBinding(
                provider_uid=entry.get("userUID", ""),
                email=entry.get("emailAddress", ""),
            )
            for entry in document.get(kind.document_field) or []
        )
        for kind in ProviderKind
    }
    return Identity(
        uid=document["uid"],
        user_name=document.get("userName") or "",
        user_color=document.get("userColor") or DEFAULT_USER_COLOR,
        version=version,
        **bindings,
    )


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model."""
    return document_to_identity(row["document"], row["version"])
