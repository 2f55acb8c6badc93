"""Settings da plataforma de conectores Rollout.

Segredos do app (client id/secret) e URLs das APIs universais.
Os segredos são opcionais no startup: a ausência só falha na emissão
de token (ConfigurationError por chamada).
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache

EMAIL_API_BASE_URL: str = "https://email.universal.rollout.com/api"
CRM_API_BASE_URL: str = "https://crm.universal.rollout.com/api"
CREDENTIALS_URL: str = "https://universal.rollout.com/api/credentials"
DEFAULT_USER_ID: str = "demo-email-user"
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 15.0
CREDENTIAL_HEADER: str = "x-rollout-credential-id"


@dataclass(frozen=True)
class RolloutSettings:
    """Configurações de acesso à plataforma Rollout.

    Attributes:
        client_id: Issuer dos tokens (ROLLOUT_CLIENT_ID)
        client_secret: Segredo HMAC dos tokens (ROLLOUT_CLIENT_SECRET)
        default_user_id: Subject usado nos tokens do proxy
        email_api_base_url: Base da API universal de email
        crm_api_base_url: Base da API universal de CRM (smart lists, people)
        credentials_url: Endpoint de listagem de credenciais
        request_timeout_seconds: Timeout por chamada upstream
        connector_app_key: App key do conector de email exibido
    """

    client_id: str = ""
    client_secret: str = ""
    default_user_id: str = DEFAULT_USER_ID

    email_api_base_url: str = EMAIL_API_BASE_URL
    crm_api_base_url: str = CRM_API_BASE_URL
    credentials_url: str = CREDENTIALS_URL

    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    connector_app_key: str = "gmail"

    @property
    def email_api_endpoint(self) -> str:
        """Base da API de email sem barra final."""
        return self.email_api_base_url.rstrip("/")

    @property
    def crm_api_endpoint(self) -> str:
        """Base da API de CRM sem barra final."""
        return self.crm_api_base_url.rstrip("/")

    def validate(self) -> list[str]:
        """Valida configurações mínimas da Rollout.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.client_id:
            errors.append("ROLLOUT_CLIENT_ID não configurado")

        if not self.client_secret:
            errors.append("ROLLOUT_CLIENT_SECRET não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("ROLLOUT_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT_SECONDS
    return value if math.isfinite(value) else DEFAULT_REQUEST_TIMEOUT_SECONDS


def _load_from_env() -> RolloutSettings:
    """Carrega RolloutSettings a partir de variáveis de ambiente."""
    return RolloutSettings(
        client_id=os.getenv("ROLLOUT_CLIENT_ID", "").strip(),
        client_secret=os.getenv("ROLLOUT_CLIENT_SECRET", "").strip(),
        default_user_id=os.getenv("ROLLOUT_DEFAULT_USER_ID", "").strip() or DEFAULT_USER_ID,
        email_api_base_url=os.getenv("ROLLOUT_EMAIL_API_BASE_URL", EMAIL_API_BASE_URL),
        crm_api_base_url=os.getenv("ROLLOUT_CRM_API_BASE_URL", CRM_API_BASE_URL),
        credentials_url=os.getenv("ROLLOUT_CREDENTIALS_URL", CREDENTIALS_URL),
        request_timeout_seconds=_parse_timeout(os.getenv("ROLLOUT_REQUEST_TIMEOUT_SECONDS", "")),
        connector_app_key=os.getenv("ROLLOUT_CONNECTOR_APP_KEY", "gmail"),
    )


@lru_cache(maxsize=1)
def get_rollout_settings() -> RolloutSettings:
    """Retorna instância cacheada de RolloutSettings."""
    return _load_from_env()
