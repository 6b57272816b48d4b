"""
Unit tests for JwtTokenIssuer.
"""

import jwt
import pytest

from campusconnect.adapters.tokens import InvalidToken, JwtTokenIssuer
from tests.factories import TEST_SECRET


class TestIssue:
    def test_round_trip_subject(self, tokens: JwtTokenIssuer) -> None:
        claims = tokens.decode(tokens.issue("acc-1"))
        assert claims.account_id == "acc-1"

    def test_lifetime_matches_ttl(self, tokens: JwtTokenIssuer) -> None:
        claims = tokens.decode(tokens.issue("acc-1"))
        assert (claims.expires_at - claims.issued_at).total_seconds() == 3600

    def test_ttl_override(self, tokens: JwtTokenIssuer) -> None:
        claims = tokens.decode(tokens.issue("acc-1", ttl_seconds=60))
        assert (claims.expires_at - claims.issued_at).total_seconds() == 60

    def test_zero_ttl_is_not_replaced_by_default(self, tokens: JwtTokenIssuer) -> None:
        token = tokens.issue("acc-1", ttl_seconds=0)
        claims = jwt.decode(
            token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        assert claims["exp"] == claims["iat"]

    def test_hs256_header(self, tokens: JwtTokenIssuer) -> None:
        assert jwt.get_unverified_header(tokens.issue("acc-1"))["alg"] == "HS256"


class TestDecodeRejects:
    def test_expired(self, tokens: JwtTokenIssuer) -> None:
        token = tokens.issue("acc-1", ttl_seconds=-10)
        with pytest.raises(InvalidToken):
            tokens.decode(token)

    def test_wrong_secret(self, tokens: JwtTokenIssuer) -> None:
        other = JwtTokenIssuer(secret="another-secret-that-is-long-enough-too", ttl_seconds=60)
        with pytest.raises(InvalidToken):
            tokens.decode(other.issue("acc-1"))

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed(self, tokens: JwtTokenIssuer, token: str) -> None:
        with pytest.raises(InvalidToken):
            tokens.decode(token)

    def test_missing_expiry(self, tokens: JwtTokenIssuer) -> None:
        token = jwt.encode({"sub": "acc-1", "iat": 0}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(InvalidToken):
            tokens.decode(token)

    def test_none_algorithm(self, tokens: JwtTokenIssuer) -> None:
        token = jwt.encode({"sub": "acc-1", "iat": 0, "exp": 9999999999}, None, algorithm="none")
        with pytest.raises(InvalidToken):
            tokens.decode(token)
