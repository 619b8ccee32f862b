"""
Unit tests for admin authentication helpers.

Tests cover:
- bcrypt hashing and verification
- Admin password check (plain and hashed configuration)
- JWT creation, decoding and expiry
- Token revocation on logout
"""

from datetime import timedelta

import pytest

from linkhub.core.config import Settings
from linkhub.core.security import (
    RevokedTokens,
    authenticate_admin,
    create_access_token,
    create_admin_token,
    decode_access_token,
    get_password_hash,
    is_admin_token,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = get_password_hash("s3cret-pass")

        assert hashed.startswith("$2")
        assert verify_password("s3cret-pass", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_verify_malformed_hash_is_false(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAuthenticateAdmin:

    def test_plain_password(self, settings):
        assert authenticate_admin("testpassword123", settings) is True
        assert authenticate_admin("testpassword12", settings) is False

    @pytest.mark.parametrize("password", [None, ""])
    def test_missing_password(self, settings, password):
        assert authenticate_admin(password, settings) is False

    def test_hash_takes_precedence(self, settings):
        hashed_settings = settings.model_copy(
            update={"admin_password_hash": get_password_hash("from-the-hash")}
        )

        assert authenticate_admin("from-the-hash", hashed_settings) is True
        assert authenticate_admin("testpassword123", hashed_settings) is False


class TestTokens:

    def test_admin_token_round_trip(self, settings):
        token = create_admin_token(settings)

        data = decode_access_token(token, settings)

        assert data is not None
        assert data.subject == "admin"
        assert data.token_id
        assert data.exp is not None
        assert is_admin_token(data) is True

    def test_token_signed_with_other_key_is_rejected(self, settings):
        other = settings.model_copy(update={"secret_key": "x" * 40})
        token = create_admin_token(other)

        assert decode_access_token(token, settings) is None

    def test_expired_token_is_rejected(self, settings):
        token = create_access_token(
            {"sub": "admin", "role": "admin"},
            settings,
            expires_delta=timedelta(seconds=-10),
        )

        assert decode_access_token(token, settings) is None

    def test_garbage_token_is_rejected(self, settings):
        assert decode_access_token("not.a.jwt", settings) is None

    def test_token_without_subject_is_rejected(self, settings):
        token = create_access_token({"role": "admin"}, settings)

        assert decode_access_token(token, settings) is None

    def test_non_admin_role(self, settings):
        token = create_access_token({"sub": "visitor", "role": "guest"}, settings)

        assert is_admin_token(decode_access_token(token, settings)) is False


class TestRevokedTokens:

    def test_revoke(self, settings):
        registry = RevokedTokens()
        data = decode_access_token(create_admin_token(settings), settings)

        assert registry.is_revoked(data) is False
        registry.revoke(data)
        assert registry.is_revoked(data) is True

    def test_revoking_one_token_leaves_others(self, settings):
        registry = RevokedTokens()
        first = decode_access_token(create_admin_token(settings), settings)
        second = decode_access_token(create_admin_token(settings), settings)

        registry.revoke(first)

        assert registry.is_revoked(second) is False
