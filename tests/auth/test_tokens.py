from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.candi_qr.candi_qr.auth.tokens import TokenService
from src.candi_qr.candi_qr.core.enums import Role
from src.candi_qr.candi_qr.core.exceptions import TokenInvalidError
from src.candi_qr.candi_qr.users.model import User

USER = User(id=7, username="guru", email=None, password_hash="x", role=Role.TEACHER, full_name="Budi")


def test_issue_and_decode_round_trip_claims():
    tokens = TokenService("secret")

    claims = tokens.decode(tokens.issue(USER))

    assert claims["user_id"] == 7
    assert claims["username"] == "guru"
    assert claims["role"] == "guru"
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_wrong_secret_is_rejected():
    token = TokenService("secret-a").issue(USER)

    with pytest.raises(TokenInvalidError):
        TokenService("secret-b").decode(token)


def test_expired_token_is_rejected():
    tokens = TokenService("secret", expires_hours=1)
    token = tokens.issue(USER, now=datetime.now(tz=timezone.utc) - timedelta(hours=2))

    with pytest.raises(TokenInvalidError):
        tokens.decode(token)


def test_malformed_token_is_rejected():
    with pytest.raises(TokenInvalidError):
        TokenService("secret").decode("not-a-token")


def test_token_without_user_id_is_rejected():
    token = jwt.encode(
        {"username": "x", "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)}, "secret", algorithm="HS256"
    )

    with pytest.raises(TokenInvalidError):
        TokenService("secret").decode(token)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")
