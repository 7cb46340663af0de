"""Unit tests for app.core.security: bcrypt hashing and JWT encode/decode."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    TOKEN_LIFETIME,
    create_access_token,
    decode_access_token,
    hash_password,
    normalize_email,
    verify_password,
)
from support import TEST_ROUNDS, TEST_SECRET, make_settings


class TestPasswordHashing(unittest.TestCase):
    """hash_password produces salted bcrypt digests that verify_password accepts."""

    def test_hash_verifies(self) -> None:
        digest = hash_password("secret123", rounds=TEST_ROUNDS)
        self.assertTrue(digest.startswith("$2"))
        self.assertTrue(verify_password("secret123", digest))

    def test_wrong_password_rejected(self) -> None:
        digest = hash_password("secret123", rounds=TEST_ROUNDS)
        self.assertFalse(verify_password("secret124", digest))

    def test_salted(self) -> None:
        self.assertNotEqual(
            hash_password("secret123", rounds=TEST_ROUNDS),
            hash_password("secret123", rounds=TEST_ROUNDS),
        )

    def test_malformed_digest_is_false(self) -> None:
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    """Tokens carry sub/role/iat/exp with a fixed 24h lifetime."""

    def setUp(self) -> None:
        self.settings = make_settings("sqlite://")

    def test_claims_and_lifetime(self) -> None:
        now = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
        token, expires_at = create_access_token(sub=5, role="admin", settings=self.settings, now=now)
        self.assertEqual(expires_at, now + timedelta(hours=24))
        payload = jwt.decode(
            token,
            TEST_SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False, "verify_iat": False},
        )
        self.assertEqual(payload["sub"], "5")
        self.assertEqual(payload["role"], "admin")
        self.assertEqual(payload["exp"] - payload["iat"], int(TOKEN_LIFETIME.total_seconds()))

    def test_decode_roundtrip(self) -> None:
        token, _ = create_access_token(sub=1, role="user", settings=self.settings)
        payload = decode_access_token(token, self.settings)
        self.assertEqual(payload["sub"], "1")

    def test_decode_rejects_other_secret(self) -> None:
        other = make_settings("sqlite://", JWT_SECRET="another-secret-with-enough-length-000")
        token, _ = create_access_token(sub=1, role="user", settings=other)
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token, self.settings)

    def test_decode_expired(self) -> None:
        past = datetime.now(UTC) - TOKEN_LIFETIME - timedelta(seconds=1)
        token, _ = create_access_token(sub=1, role="user", settings=self.settings, now=past)
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token, self.settings)


class TestNormalizeEmail(unittest.TestCase):
    def test_lowercases_and_strips(self) -> None:
        self.assertEqual(normalize_email("  A@X.Com "), "a@x.com")


if __name__ == "__main__":
    unittest.main()
