"""Agregador de settings do serviço.

Re-exporta as settings de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.rollout import (
    CREDENTIAL_HEADER,
    RolloutSettings,
    get_rollout_settings,
)

__all__ = [
    "CREDENTIAL_HEADER",
    "BaseSettings",
    "Environment",
    "RolloutSettings",
    "get_base_settings",
    "get_rollout_settings",
]
