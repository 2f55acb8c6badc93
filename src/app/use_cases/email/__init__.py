"""Use cases de email: inbox, resposta, envio e credencial ativa."""

from .load_active_credential import LoadActiveCredentialUseCase
from .load_inbox import DEFAULT_MESSAGE_LIMIT, MAX_PAGES, LoadInboxUseCase, sort_newest_first
from .resolve_reply_target import ResolveReplyTargetUseCase, build_reply_subject
from .send_message import SendMessageCommand, SendMessageUseCase

__all__ = [
    "DEFAULT_MESSAGE_LIMIT",
    "MAX_PAGES",
    "LoadActiveCredentialUseCase",
    "LoadInboxUseCase",
    "ResolveReplyTargetUseCase",
    "SendMessageCommand",
    "SendMessageUseCase",
    "build_reply_subject",
    "sort_newest_first",
]
