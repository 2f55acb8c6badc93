"""Modelos da camada de conector Rollout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class UpstreamResponse:
    """Resposta do upstream já normalizada para repasse.

    Attributes:
        status_code: Status HTTP original, repassado sem alteração
        body: JSON decodificado; ``{}`` para corpo vazio e
            ``{"raw": texto}`` para corpo que não é JSON
    """

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
