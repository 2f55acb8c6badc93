"""Normalizers — conversão de payloads externos para modelos internos.

Estrutura:
- email/: mensagens e credenciais da API universal de email
"""

from .email import normalize_credential, normalize_message

__all__ = [
    "normalize_credential",
    "normalize_message",
]
