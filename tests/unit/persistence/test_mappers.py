"""Unit tests for identity document mappers."""

from tokiwa.domain.model.identity import Identity, ProviderBinding
from tokiwa.persistence.mappers import document_to_identity, identity_to_document


class TestIdentityDocument:
    """Tests for the stored document shape."""

    def test_document_uses_client_field_names(self):
        identity = Identity(
            uid="u1",
            user_name="Ada",
            user_color="#123456",
            password=(ProviderBinding(provider_uid="u1", email="a@x.io"),),
            twitter=(ProviderBinding(provider_uid="t1"),),
        )

        document = identity_to_document(identity)

        assert document == {
            "userName": "Ada",
            "userColor": "#123456",
            "uid": "u1",
            "email": [{"userUID": "u1", "emailAddress": "a@x.io"}],
            "google": [],
            "github": [],
            "twitter": [{"userUID": "t1", "emailAddress": ""}],
        }

    def test_sparse_document_loads_with_defaults(self):
        """Documents missing provider lists or profile fields still load."""
        identity = document_to_identity(
            {"uid": "u1", "google": [{"userUID": "g1", "emailAddress": "a@x.io"}]},
            version=3,
        )

        assert identity.user_name == ""
        assert identity.user_color == "#3b82f6"
        assert identity.google == (ProviderBinding(provider_uid="g1", email="a@x.io"),)
        assert identity.password == ()
        assert identity.version == 3
