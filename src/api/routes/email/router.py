"""Endpoints de email consumidos pela UI.

- GET  /credentials/active   credencial conectada (ou 404)
- GET  /inbox                mensagens normalizadas, mais recentes primeiro
- POST /messages             envio de email pela mailbox conectada
- POST /reply-target         destinatário/assunto/thread para resposta
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from api.routes._responses import error_response, read_json_body, text_field
from api.validators.rollout import require_credential_id, validate_page_size
from app.bootstrap import get_rollout_gateway
from app.bootstrap.dependencies import (
    create_active_credential_use_case,
    create_load_inbox_use_case,
    create_reply_target_use_case,
    create_send_message_use_case,
)
from app.protocols.models import EmailMessage, Recipient
from app.use_cases.email import DEFAULT_MESSAGE_LIMIT, SendMessageCommand
from utils.errors import ProxyError, ServiceError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CREDENTIAL_MESSAGE = "No credential found"


def _service_error(operation: str, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "email_request_failed",
        extra={
            "operation": operation,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
            "error": exc.message,
        },
    )
    return error_response(exc)


def _unexpected_error(operation: str, exc: Exception) -> JSONResponse:
    logger.exception(
        "email_request_unexpected_error",
        extra={"operation": operation, "error_type": type(exc).__name__},
    )
    return error_response(ProxyError())


@router.get("/credentials/active", response_model=None)
async def get_active_credential(request: Request) -> Response:
    """Primeira credencial do app conectado, com perfil normalizado."""
    app_key = (request.query_params.get("app_key") or "").strip() or None
    use_case = create_active_credential_use_case(get_rollout_gateway(), app_key)
    try:
        credential = await use_case.execute()
    except ServiceError as exc:
        return _service_error("active_credential", exc)
    except Exception as exc:
        return _unexpected_error("active_credential", exc)

    if credential is None:
        return JSONResponse(content={"error": NO_CREDENTIAL_MESSAGE}, status_code=404)
    return JSONResponse(content=credential.as_dict())


@router.get("/inbox", response_model=None)
async def load_inbox(request: Request) -> Response:
    """Lista as mensagens da mailbox.

    Query params: ``credentialId`` (obrigatório), ``credentialEmail``
    (filtra enviados pela própria conta), ``limit`` (1-100, default 20).
    """
    params = request.query_params
    try:
        credential_id = require_credential_id(params.get("credentialId"))
        limit = validate_page_size(params.get("limit"), DEFAULT_MESSAGE_LIMIT)
        use_case = create_load_inbox_use_case(get_rollout_gateway())
        messages = await use_case.execute(
            credential_id,
            desired_count=limit,
            credential_email=params.get("credentialEmail") or "",
        )
    except ServiceError as exc:
        return _service_error("load_inbox", exc)
    except Exception as exc:
        return _unexpected_error("load_inbox", exc)

    logger.info("inbox_loaded", extra={"credential_id": credential_id, "count": len(messages)})
    return JSONResponse(content={"messages": [message.as_dict() for message in messages]})


def _parse_recipient_list(value: Any) -> tuple[Recipient, ...]:
    if not isinstance(value, list):
        return ()
    recipients = []
    for item in value:
        if not isinstance(item, dict):
            continue
        email = item.get("email")
        if not isinstance(email, str) or not email.strip():
            continue
        name = item.get("name")
        recipients.append(
            Recipient(name=name.strip() if isinstance(name, str) else "", email=email.strip())
        )
    return tuple(recipients)


def _parse_sender(value: Any) -> Recipient | None:
    if not isinstance(value, dict):
        return None
    parsed = _parse_recipient_list([value])
    return parsed[0] if parsed else None


def build_send_command(body: dict[str, Any]) -> SendMessageCommand:
    """Converte o corpo de ``POST /messages`` em SendMessageCommand."""
    message_body = body.get("body")
    return SendMessageCommand(
        credential_id=text_field(body, "credentialId"),
        subject=text_field(body, "subject"),
        body=message_body if isinstance(message_body, str) else "",
        to=text_field(body, "to"),
        cc=text_field(body, "cc"),
        bcc=text_field(body, "bcc"),
        recipients=_parse_recipient_list(body.get("recipients")),
        sender=_parse_sender(body.get("sender")),
        credential_label=text_field(body, "credentialLabel"),
        credential_email=text_field(body, "credentialEmail"),
        thread_id=text_field(body, "threadId"),
    )


@router.post("/messages", response_model=None)
async def send_message(request: Request) -> Response:
    """Envia email; ``{"status": "sent", "result": <upstream>}`` no sucesso."""
    try:
        command = build_send_command(await read_json_body(request))
        use_case = create_send_message_use_case(get_rollout_gateway())
        forwarded = await use_case.execute(command)
    except ServiceError as exc:
        return _service_error("send_message", exc)
    except Exception as exc:
        return _unexpected_error("send_message", exc)

    return JSONResponse(content={"status": "sent", "result": forwarded.body})


@router.post("/reply-target", response_model=None)
async def resolve_reply_target(request: Request) -> Response:
    """Resolve destinatário, assunto ``Re:`` e thread para responder."""
    try:
        body = await read_json_body(request)
        credential_id = require_credential_id(body.get("credentialId"))
        raw_message = body.get("message")
        if not isinstance(raw_message, dict):
            raise ValidationError("message is required")
        message = EmailMessage.from_dict(raw_message)
        use_case = create_reply_target_use_case(get_rollout_gateway())
        target = await use_case.execute(message, credential_id)
    except ServiceError as exc:
        return _service_error("reply_target", exc)
    except Exception as exc:
        return _unexpected_error("reply_target", exc)

    return JSONResponse(content=target.as_dict())
