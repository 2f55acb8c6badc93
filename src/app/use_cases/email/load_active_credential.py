"""Use case que localiza a credencial de email já conectada."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.normalizers.email import extract_credential_list, normalize_credential

if TYPE_CHECKING:
    from app.protocols.email_gateway import EmailGatewayProtocol
    from app.protocols.models import CredentialProfile

logger = logging.getLogger(__name__)

DEFAULT_APP_KEY = "gmail"


class LoadActiveCredentialUseCase:
    """Busca credenciais do app e escolhe a do conector de email."""

    def __init__(self, gateway: EmailGatewayProtocol, app_key: str = DEFAULT_APP_KEY) -> None:
        self._gateway = gateway
        self._app_key = app_key

    async def execute(self) -> CredentialProfile | None:
        """Retorna a credencial com ``appKey`` do conector, senão a primeira.

        None quando o upstream falha ou não há credencial utilizável.
        """
        response = await self._gateway.list_credentials(self._app_key)
        if not response.ok:
            logger.error(
                "credentials_load_failed",
                extra={"status_code": response.status_code, "payload": response.body},
            )
            return None

        credentials = [item for item in extract_credential_list(response.body) if isinstance(item, dict)]
        chosen = next(
            (item for item in credentials if item.get("appKey") == self._app_key),
            credentials[0] if credentials else None,
        )
        profile = normalize_credential(chosen)
        if profile is None:
            logger.info("credential_not_found", extra={"app_key": self._app_key})
        return profile
