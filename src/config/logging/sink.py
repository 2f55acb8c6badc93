"""Sink de logging best-effort.

Falha ao logar é lacuna de observabilidade, nunca falha de requisição:
qualquer exceção levantada dentro do bloco é descartada.

Uso:
    with log_sink(logger) as log:
        log.info("upstream_response", extra={"status_code": 200, "body": body})
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def log_sink(logger: logging.Logger) -> Iterator[logging.Logger]:
    """Entrega o logger e suprime exceções levantadas ao logar."""
    try:
        yield logger
    except Exception:  # noqa: BLE001
        try:
            logging.getLogger(__name__).debug("log_write_failed", extra={"target": logger.name})
        except Exception:  # noqa: BLE001
            pass
