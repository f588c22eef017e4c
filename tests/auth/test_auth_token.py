import unittest

from jose import jwt

from driveview.auth.token import is_token_expired, parse_jwt


def make_jwt(claims: dict) -> str:
    return jwt.encode(claims, "test-secret", algorithm="HS256")


class TestToken(unittest.TestCase):
    def test_parse_jwt_reads_claims(self) -> None:
        token = make_jwt({"sub": "u1", "exp": 2000})
        self.assertEqual(parse_jwt(token), {"sub": "u1", "exp": 2000})

    def test_parse_jwt_does_not_verify_signature(self) -> None:
        token = jwt.encode({"sub": "u2"}, "some-other-secret", algorithm="HS256")
        self.assertEqual(parse_jwt(token), {"sub": "u2"})

    def test_parse_jwt_rejects_non_object_claims(self) -> None:
        header = make_jwt({}).split(".")[0]
        self.assertIsNone(parse_jwt(f"{header}.WzEsMl0.c2ln"))

    def test_parse_jwt_rejects_garbage(self) -> None:
        self.assertIsNone(parse_jwt("not-a-jwt"))
        self.assertIsNone(parse_jwt("a.!!!.c"))
        self.assertIsNone(parse_jwt(None))  # type: ignore[arg-type]

    def test_is_token_expired(self) -> None:
        token = make_jwt({"exp": 2000})
        self.assertFalse(is_token_expired(token, now=1999))
        self.assertTrue(is_token_expired(token, now=2000))

    def test_token_without_exp_is_expired(self) -> None:
        self.assertTrue(is_token_expired(make_jwt({"sub": "u1"})))
        self.assertTrue(is_token_expired("opaque"))


if __name__ == "__main__":
    unittest.main()
