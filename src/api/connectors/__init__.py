"""Connectors — adapters de borda para APIs externas.

Estrutura:
- rollout/: APIs universais Rollout (email, CRM, credenciais)
"""

__all__: list[str] = []
