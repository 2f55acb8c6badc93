"""Emissão de tokens Bearer para a plataforma Rollout.

Tokens JWT HS512 de vida curta, assinados com o client secret do app.
Função pura de (segredos, relógio, subject): nada é armazenado e cada
chamada gera um token novo.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import jwt

from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

TOKEN_TTL_SECONDS = 900
TOKEN_ALGORITHM = "HS512"


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """Token emitido (sem o segredo)."""

    value: str
    issuer: str
    subject: str
    issued_at: int
    expires_at: int


class TokenIssuer:
    """Assina tokens para um subject com os segredos do app."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._clock = clock

    def issue(self, subject: str) -> IssuedToken:
        """Emite token com claims {iss, sub, iat, exp}.

        Raises:
            ConfigurationError: client id ou client secret ausente.
        """
        self._ensure_configured()
        now = int(self._clock())
        claims = {
            "iss": self._client_id,
            "sub": subject,
            "iat": now,
            "exp": now + TOKEN_TTL_SECONDS,
        }
        value = jwt.encode(claims, self._client_secret, algorithm=TOKEN_ALGORITHM)
        return IssuedToken(
            value=value,
            issuer=self._client_id,
            subject=subject,
            issued_at=now,
            expires_at=now + TOKEN_TTL_SECONDS,
        )

    def verify(self, token: str) -> dict[str, Any]:
        """Decodifica e valida assinatura/expiração com o mesmo segredo.

        Raises:
            ConfigurationError: segredos ausentes.
            jwt.InvalidTokenError: assinatura inválida ou token expirado.
        """
        self._ensure_configured()
        return jwt.decode(
            token,
            self._client_secret,
            algorithms=[TOKEN_ALGORITHM],
            issuer=self._client_id,
            options={"require": ["iss", "sub", "iat", "exp"]},
        )

    def _ensure_configured(self) -> None:
        if not self._client_id.strip():
            raise ConfigurationError("ROLLOUT_CLIENT_ID not configured")
        if not self._client_secret.strip():
            raise ConfigurationError("ROLLOUT_CLIENT_SECRET not configured")
