"""Validators — validação de requisições antes de encaminhar ao upstream.

Estrutura:
- rollout/: requisições de proxy para as APIs universais Rollout
"""

__all__: list[str] = []
