"""Unit tests for the authentication gate."""

from datetime import timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.core.auth.backend import TokenCodec
from app.core.auth.dependencies import authenticate, resolve_identity
from app.core.auth.schemas import AuthenticatedIdentity
from app.core.errors import UnauthenticatedError
from app.core.permissions.roles import Permission, Role, get_role_catalog


pytestmark = pytest.mark.unit


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(
        secret_key="gate-test-secret-key-long-enough-for-hs256",
        catalog=get_role_catalog(),
    )


@pytest.fixture
def identity() -> AuthenticatedIdentity:
    return AuthenticatedIdentity(
        id=uuid4(),
        username="vera",
        role=Role.VISITOR,
        permissions=frozenset({Permission.READ}),
    )


class TestResolveIdentity:
    """Tests for resolve_identity."""

    def test_valid_token(self, codec, identity):
        assert resolve_identity(codec.issue(identity), codec) == identity

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, codec, token):
        with pytest.raises(UnauthenticatedError) as exc_info:
            resolve_identity(token, codec)

        assert exc_info.value.error_code == "missing_token"

    def test_expired_and_invalid_look_the_same(self, codec, identity):
        """Clients should not learn which verification step failed."""
        expired = codec.issue(identity, ttl=timedelta(seconds=-5))

        with pytest.raises(UnauthenticatedError) as expired_info:
            resolve_identity(expired, codec)
        with pytest.raises(UnauthenticatedError) as invalid_info:
            resolve_identity("garbage", codec)

        assert expired_info.value.error_code == invalid_info.value.error_code
        assert expired_info.value.message == invalid_info.value.message


class TestAuthenticate:
    """Tests for the authenticate dependency."""

    async def test_attaches_identity_to_request(self, codec, identity):
        """authenticate should store the identity on request.state."""
        request = SimpleNamespace(state=SimpleNamespace())
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer",
            credentials=codec.issue(identity),
        )

        result = await authenticate(request, credentials, codec)

        assert result == identity
        assert request.state.identity == identity

    async def test_no_credentials(self, codec):
        """authenticate should refuse a request without a bearer token."""
        request = SimpleNamespace(state=SimpleNamespace())

        with pytest.raises(UnauthenticatedError):
            await authenticate(request, None, codec)

        assert not hasattr(request.state, "identity")
