"""Validators das requisições encaminhadas à Rollout.

Toda validação roda antes de emitir token ou tocar a rede.
"""

from api.validators.rollout.requests import (
    ProxyRequest,
    parse_json_body,
    require_credential_id,
    require_text,
    validate_page_size,
    validate_person_request,
    validate_send_payload,
    validate_smart_list_request,
)

__all__ = [
    "ProxyRequest",
    "parse_json_body",
    "require_credential_id",
    "require_text",
    "validate_page_size",
    "validate_person_request",
    "validate_send_payload",
    "validate_smart_list_request",
]
