"""Protocolo do gateway de email usado pelos casos de uso.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from api.connectors.rollout.models import UpstreamResponse


class EmailGatewayProtocol(Protocol):
    """Contrato mínimo das operações de email encaminhadas ao upstream."""

    async def list_messages(
        self,
        credential_id: str,
        limit: int,
        cursor: str = "",
    ) -> UpstreamResponse: ...

    async def get_message(self, credential_id: str, message_id: str) -> UpstreamResponse: ...

    async def send_message(
        self,
        credential_id: str,
        payload: dict[str, Any],
    ) -> UpstreamResponse: ...

    async def create_thread(self, credential_id: str, subject: str) -> UpstreamResponse: ...

    async def list_credentials(self, app_key: str) -> UpstreamResponse: ...
