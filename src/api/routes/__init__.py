"""Rotas HTTP da API.

- routes/health/: liveness
- routes/token/: emissão de token Bearer para a UI
- routes/proxy/: repasse para a API universal de CRM
- routes/email/: inbox, envio e resolução de resposta

Agregação em router.py.
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
