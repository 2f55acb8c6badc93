"""Settings base do serviço.

Configurações comuns ao processo HTTP (ambiente, porta, CORS).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

DEFAULT_PORT = 4567
DEFAULT_CORS_ALLOW_ORIGIN = "*"


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs
        debug: Modo debug ativo
        port: Porta de bind do servidor HTTP
        cors_allow_origin: Origin liberada no CORS ("*" libera todas)
    """

    environment: Environment = "development"
    service_name: str = "mailbridge"
    debug: bool = False
    port: int = DEFAULT_PORT
    cors_allow_origin: str = DEFAULT_CORS_ALLOW_ORIGIN

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Lista de origins aceita pelo CORSMiddleware."""
        return [origin.strip() for origin in self.cors_allow_origin.split(",") if origin.strip()]

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if self.environment not in ("development", "staging", "production"):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if not 0 < self.port < 65536:
            errors.append(f"PORT fora do intervalo válido: {self.port}")

        if not self.cors_origins:
            errors.append("CORS_ALLOW_ORIGIN não pode ser vazio")

        return errors


def _parse_environment(env_str: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _parse_port(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "mailbridge"),
        debug=os.getenv("DEBUG", "").lower() in ("true", "1", "yes"),
        port=_parse_port(os.getenv("PORT", str(DEFAULT_PORT))),
        cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", DEFAULT_CORS_ALLOW_ORIGIN),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
