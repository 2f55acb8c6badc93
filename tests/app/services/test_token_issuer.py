"""Testes do TokenIssuer (JWT HS512, 900s)."""

from __future__ import annotations

import jwt
import pytest

from app.services.token_issuer import TOKEN_ALGORITHM, TOKEN_TTL_SECONDS, TokenIssuer
from utils.errors import ConfigurationError

FIXED_NOW = 1_700_000_000


def _issuer(client_id: str = "app-id", client_secret: str = "app-secret") -> TokenIssuer:
    return TokenIssuer(client_id, client_secret, clock=lambda: FIXED_NOW + 0.7)


def test_issue_sets_claims_with_fixed_ttl() -> None:
    issued = _issuer().issue("demo-email-user")

    claims = jwt.decode(
        issued.value,
        "app-secret",
        algorithms=[TOKEN_ALGORITHM],
        options={"verify_exp": False, "verify_iat": False},
    )

    assert claims == {
        "iss": "app-id",
        "sub": "demo-email-user",
        "iat": FIXED_NOW,
        "exp": FIXED_NOW + TOKEN_TTL_SECONDS,
    }
    assert issued.expires_at - issued.issued_at == 900
    assert jwt.get_unverified_header(issued.value)["alg"] == "HS512"


def test_each_call_is_independent() -> None:
    issuer = _issuer()
    assert issuer.issue("a").subject == "a"
    assert issuer.issue("b").subject == "b"


def test_verify_accepts_own_token() -> None:
    issuer = TokenIssuer("app-id", "app-secret")
    token = issuer.issue("user-1").value
    assert issuer.verify(token)["sub"] == "user-1"


def test_verify_rejects_other_secret() -> None:
    token = TokenIssuer("app-id", "app-secret").issue("user-1").value
    with pytest.raises(jwt.InvalidSignatureError):
        TokenIssuer("app-id", "other-secret").verify(token)


def test_verify_rejects_expired_token() -> None:
    token = TokenIssuer("app-id", "app-secret", clock=lambda: 1_000).issue("user-1").value
    with pytest.raises(jwt.ExpiredSignatureError):
        TokenIssuer("app-id", "app-secret").verify(token)


@pytest.mark.parametrize(
    ("client_id", "client_secret", "message"),
    [
        ("", "secret", "ROLLOUT_CLIENT_ID not configured"),
        ("app-id", "", "ROLLOUT_CLIENT_SECRET not configured"),
        ("  ", "", "ROLLOUT_CLIENT_ID not configured"),
    ],
)
def test_missing_secrets_raise_configuration_error(
    client_id: str, client_secret: str, message: str
) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        _issuer(client_id, client_secret).issue("user")

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 500
