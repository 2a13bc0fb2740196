"""Unit tests for infrastructure.identity.resolver."""

import time

import jwt
import pytest

from infrastructure.exceptions import AuthenticationError
from infrastructure.identity import IdentitySource, PrincipalResolver

SECRET = "test-secret-with-enough-length-for-hs256"


@pytest.fixture
def resolver():
    return PrincipalResolver(secret=SECRET)


def make_token(claims, secret=SECRET, algorithm="HS256"):
    return jwt.encode(claims, secret, algorithm=algorithm)


@pytest.mark.unit
class TestPrincipalResolver:
    def test_resolves_user_id_claim(self, resolver):
        principal = resolver.resolve_from_jwt(make_token({"userId": "alice", "sub": "x"}))

        assert principal.user_id == "alice"
        assert principal.source == IdentitySource.API_JWT
        assert principal.claims["sub"] == "x"

    def test_falls_back_to_sub(self, resolver):
        principal = resolver.resolve_from_jwt(make_token({"sub": "bob"}))
        assert principal.user_id == "bob"

    def test_custom_claim(self):
        resolver = PrincipalResolver(secret=SECRET, user_id_claim="uid")
        assert resolver.resolve_from_jwt(make_token({"uid": "carol"})).user_id == "carol"

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "not-a-token",
            make_token({"userId": "alice"}, secret="another-secret-of-sufficient-size"),
            make_token({"userId": "alice", "exp": int(time.time()) - 60}),
            make_token({"name": "no id"}),
        ],
    )
    def test_rejects_invalid_tokens(self, resolver, token):
        with pytest.raises(AuthenticationError):
            resolver.resolve_from_jwt(token)

    def test_rejects_everything_without_secret(self):
        resolver = PrincipalResolver(secret=None)
        with pytest.raises(AuthenticationError):
            resolver.resolve_from_jwt(make_token({"userId": "alice"}))
