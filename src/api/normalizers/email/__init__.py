"""Normalizer Email — extração e normalização de payloads da API universal.

Responsabilidades:
- Localizar listas de mensagens/credenciais e o cursor de paginação
- Normalizar mensagens para EmailMessage e credenciais para CredentialProfile
- Extrair endereços, remetentes e corpo em texto puro de formatos variados

Nenhuma função levanta exceção para payload malformado.
"""

from ._extraction_helpers import (
    as_non_empty_string,
    emails_match,
    extract_body_text,
    extract_email_address,
    extract_sender_details,
    html_to_plain_text,
    normalize_email,
    truncate_body,
)
from .extractor import extract_credential_list, extract_message_list, extract_next_cursor
from .normalizer import (
    derive_credential_email,
    merge_recipients,
    normalize_credential,
    normalize_message,
    parse_received_at,
    parse_recipients,
    resolve_credential_label,
)

__all__ = [
    "as_non_empty_string",
    "derive_credential_email",
    "emails_match",
    "extract_body_text",
    "extract_credential_list",
    "extract_email_address",
    "extract_message_list",
    "extract_next_cursor",
    "extract_sender_details",
    "html_to_plain_text",
    "merge_recipients",
    "normalize_credential",
    "normalize_email",
    "normalize_message",
    "parse_received_at",
    "parse_recipients",
    "resolve_credential_label",
    "truncate_body",
]
