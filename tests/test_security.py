"""Unit tests for app.core.security: password policy, bcrypt hasher, JWT issuer."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    ACCESS_TOKEN_TTL,
    REFRESH_TOKEN_TTL,
    CredentialHasher,
    InvalidInputError,
    InvalidTokenError,
    TokenIssuer,
    is_strong_password,
    password_requirement_message,
)
from tests.fakes import ACCESS_SECRET, REFRESH_SECRET, make_hasher, make_issuer


class TestPasswordPolicy(unittest.TestCase):
    """Length >= 10 plus lower, upper, digit and symbol."""

    def test_accepts_strong_password(self) -> None:
        self.assertTrue(is_strong_password("StrongPass#123"))

    def test_rejects_each_missing_class(self) -> None:
        weak = [
            "Short#1a",  # too short
            "strongpass#123",  # no upper
            "STRONGPASS#123",  # no lower
            "StrongPass#abc",  # no digit
            "StrongPass1234",  # no symbol
            "",
        ]
        for password in weak:
            with self.subTest(password=password):
                self.assertFalse(is_strong_password(password))

    def test_underscore_counts_as_symbol(self) -> None:
        self.assertTrue(is_strong_password("Strong_Pass123"))

    def test_exactly_minimum_length(self) -> None:
        self.assertTrue(is_strong_password("Abcdefg#12"))
        self.assertFalse(is_strong_password("Abcdef#12"))

    def test_custom_minimum_length(self) -> None:
        self.assertFalse(is_strong_password("StrongPass#123", min_length=20))

    def test_non_string_is_rejected(self) -> None:
        self.assertFalse(is_strong_password(None))  # type: ignore[arg-type]

    def test_non_ascii_letters_and_digits_do_not_count(self) -> None:
        self.assertFalse(is_strong_password("\u00c0\u00c0\u00c0\u00c0\u00c0\u00e0\u00e0\u00e0\u00e01!"))
        self.assertFalse(is_strong_password("Aaaaaaaaa\u00b2!"))

    def test_non_ascii_character_counts_as_symbol(self) -> None:
        self.assertTrue(is_strong_password("StrongPass\u00e91"))

    def test_requirement_message_names_minimum_length(self) -> None:
        self.assertIn("at least 10 characters", password_requirement_message())
        self.assertIn("at least 16 characters", password_requirement_message(16))


class TestCredentialHasher(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = make_hasher()

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        digest = self.hasher.hash("StrongPass#123")
        self.assertNotEqual(digest, "StrongPass#123")
        self.assertTrue(self.hasher.verify("StrongPass#123", digest))
        self.assertFalse(self.hasher.verify("WrongPass#123", digest))

    def test_salt_differs_per_call(self) -> None:
        self.assertNotEqual(self.hasher.hash("StrongPass#123"), self.hasher.hash("StrongPass#123"))

    def test_work_factor_is_encoded_in_digest(self) -> None:
        digest = CredentialHasher(rounds=5).hash("StrongPass#123")
        self.assertTrue(digest.startswith("$2b$05$"))

    def test_empty_or_non_string_input_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.hasher.hash("")
        with self.assertRaises(InvalidInputError):
            self.hasher.hash(None)  # type: ignore[arg-type]

    def test_malformed_digest_does_not_verify(self) -> None:
        self.assertFalse(self.hasher.verify("StrongPass#123", "not-a-bcrypt-hash"))


class TestTokenIssuer(unittest.TestCase):
    def setUp(self) -> None:
        self.issuer = make_issuer()

    def test_access_token_round_trip(self) -> None:
        token = self.issuer.issue_access_token(42)
        self.assertEqual(self.issuer.verify_access_token(token), 42)

    def test_refresh_token_round_trip(self) -> None:
        token = self.issuer.issue_refresh_token(7)
        self.assertEqual(self.issuer.verify_refresh_token(token), 7)

    def test_refresh_token_rejected_as_access_token(self) -> None:
        with self.assertRaises(InvalidTokenError):
            self.issuer.verify_access_token(self.issuer.issue_refresh_token(1))

    def test_access_token_rejected_as_refresh_token(self) -> None:
        with self.assertRaises(InvalidTokenError):
            self.issuer.verify_refresh_token(self.issuer.issue_access_token(1))

    def test_type_claim_checked_even_with_matching_secret(self) -> None:
        forged = jwt.encode(
            {"sub": "1", "type": "refresh", "iat": datetime.now(UTC), "exp": datetime.now(UTC) + timedelta(hours=1)},
            ACCESS_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            self.issuer.verify_access_token(forged)

    def test_expired_access_token_rejected(self) -> None:
        past = datetime.now(UTC) - ACCESS_TOKEN_TTL - timedelta(minutes=1)
        stale_issuer = make_issuer(clock=lambda: past)
        token = stale_issuer.issue_access_token(1)
        with self.assertRaises(InvalidTokenError):
            self.issuer.verify_access_token(token)

    def test_access_token_within_window_accepted(self) -> None:
        recent = datetime.now(UTC) - ACCESS_TOKEN_TTL + timedelta(minutes=5)
        token = make_issuer(clock=lambda: recent).issue_access_token(3)
        self.assertEqual(self.issuer.verify_access_token(token), 3)

    def test_lifetimes_are_fixed(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        issuer = make_issuer(clock=lambda: now)
        access = jwt.decode(issuer.issue_access_token(1), options={"verify_signature": False})
        refresh = jwt.decode(issuer.issue_refresh_token(1), options={"verify_signature": False})
        self.assertEqual(access["exp"] - access["iat"], int(ACCESS_TOKEN_TTL.total_seconds()))
        self.assertEqual(refresh["exp"] - refresh["iat"], int(REFRESH_TOKEN_TTL.total_seconds()))
        self.assertEqual(access["sub"], "1")

    def test_tampered_and_malformed_tokens_rejected(self) -> None:
        header, _, signature = self.issuer.issue_access_token(1).split(".")
        other_payload = self.issuer.issue_access_token(2).split(".")[1]
        tampered = ".".join([header, other_payload, signature])
        for bad in (tampered, "not.a.jwt", "", "abc"):
            with self.subTest(token=bad):
                with self.assertRaises(InvalidTokenError):
                    self.issuer.verify_access_token(bad)

    def test_token_signed_with_other_secret_rejected(self) -> None:
        other = TokenIssuer("another-access-secret", REFRESH_SECRET)
        with self.assertRaises(InvalidTokenError):
            self.issuer.verify_access_token(other.issue_access_token(1))

    def test_identical_secrets_refused(self) -> None:
        with self.assertRaises(ValueError):
            TokenIssuer("same", "same")


if __name__ == "__main__":
    unittest.main()
