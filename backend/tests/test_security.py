import unittest
from datetime import timedelta

import jwt

from hirehub.core.security import (
    create_access_token,
    create_recruiter_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswords(unittest.TestCase):
    def test_hash_roundtrip(self):
        hashed = get_password_hash("admin@123")

        self.assertNotEqual(hashed, "admin@123")
        self.assertTrue(verify_password("admin@123", hashed))
        self.assertFalse(verify_password("admin@124", hashed))

    def test_hash_is_salted(self):
        self.assertNotEqual(get_password_hash("same"), get_password_hash("same"))


class TestTokens(unittest.TestCase):
    def test_recruiter_token_claims(self):
        payload = decode_access_token(create_recruiter_token("abc123", "hr@acme.com"))

        self.assertEqual(payload["sub"], "abc123")
        self.assertEqual(payload["email"], "hr@acme.com")

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "abc123"}, expires_delta=timedelta(seconds=-10))

        self.assertIsNone(decode_access_token(token))

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "abc123"}, "some-other-secret", algorithm="HS256")

        self.assertIsNone(decode_access_token(token))


if __name__ == "__main__":
    unittest.main()
