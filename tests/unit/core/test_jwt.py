"""Tests for access token generation and verification."""

import time

import pytest
from authlib.jose import jwt

from src.bilemo.core.errors import AuthenticationError
from src.bilemo.core.services import JwtGeneratorService, JwtVerificationService
from src.bilemo.entities.core.client import ROLE_ADMIN, Client
from src.bilemo.runtime.config.config_data import ConfigData
from src.bilemo.runtime.context import get_config, with_context


@pytest.fixture
def client() -> Client:
    return Client(id=7, email="admin@test.fr", roles=[ROLE_ADMIN], password_hash="x")


class TestJwtRoundTrip:
    def test_generated_token_verifies(self, client):
        token = JwtGeneratorService().generate_access_token(client)

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.client_id == 7
        assert claims.email == "admin@test.fr"
        assert set(claims.roles) == {"ROLE_USER", ROLE_ADMIN}
        assert claims.issuer == get_config().jwt.issuer
        assert claims.jti

    def test_token_lifetime_follows_config(self, client):
        override = ConfigData()
        override.jwt.token_ttl_seconds = 120

        with with_context(override):
            claims = JwtVerificationService().verify_jwt(
                JwtGeneratorService().generate_access_token(client)
            )

        assert claims.expires_at - claims.issued_at == 120

    def test_standard_claims_cannot_be_overridden(self):
        token = JwtGeneratorService().generate_jwt("5", claims={"sub": "999", "iss": "evil"})

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.subject == "5"
        assert claims.issuer == get_config().jwt.issuer

    def test_disallowed_algorithm_is_refused(self):
        with pytest.raises(RuntimeError):
            JwtGeneratorService().generate_jwt("1", algorithm="none")


class TestJwtRejection:
    def test_wrong_secret(self, client):
        token = JwtGeneratorService().generate_jwt("7", secret="another-secret")

        with pytest.raises(AuthenticationError):
            JwtVerificationService().verify_jwt(token)

    def test_expired_token(self):
        token = JwtGeneratorService().generate_jwt("7", expires_in_seconds=-3600)

        with pytest.raises(AuthenticationError):
            JwtVerificationService().verify_jwt(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            JwtVerificationService().verify_jwt("not-a-jwt")

    def test_wrong_audience(self):
        cfg = get_config()
        now = int(time.time())
        token = jwt.encode(
            {"alg": "HS256"},
            {"iss": cfg.jwt.issuer, "sub": "7", "aud": "someone-else", "exp": now + 60, "iat": now},
            cfg.app.jwt_secret,
        ).decode()

        with pytest.raises(AuthenticationError):
            JwtVerificationService().verify_jwt(token)
