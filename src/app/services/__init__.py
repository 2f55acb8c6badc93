"""Serviços de aplicação."""

from app.services.token_issuer import TOKEN_TTL_SECONDS, IssuedToken, TokenIssuer

__all__ = [
    "TOKEN_TTL_SECONDS",
    "IssuedToken",
    "TokenIssuer",
]
