"""Testes do SendMessageUseCase."""

from __future__ import annotations

import pytest

from api.connectors.rollout.models import UpstreamResponse
from app.protocols.models import Recipient
from app.use_cases.email import SendMessageCommand, SendMessageUseCase
from tests.fakes.fake_email_gateway import FakeEmailGateway
from utils.errors import UpstreamError, ValidationError


def _command(**overrides: object) -> SendMessageCommand:
    fields: dict[str, object] = {
        "credential_id": "cred-1",
        "subject": "Hello",
        "body": "Hi there",
        "to": "you@y.com",
        "credential_label": "Work",
        "credential_email": "me@work.com",
    }
    fields.update(overrides)
    return SendMessageCommand(**fields)


def test_build_payload_merges_recipients_and_thread() -> None:
    payload = SendMessageUseCase.build_payload(
        _command(cc="Bob <bob@x.org>; you@y.com", bcc="c@z.com", thread_id="t-1")
    )

    assert payload == {
        "subject": "Hello",
        "body": "Hi there",
        "sender": {"name": "Work", "email": "me@work.com"},
        "recipients": [
            {"name": "you@y.com", "email": "you@y.com"},
            {"name": "Bob", "email": "bob@x.org"},
            {"name": "c@z.com", "email": "c@z.com"},
        ],
        "threadId": "t-1",
    }


def test_explicit_sender_and_recipients_win() -> None:
    payload = SendMessageUseCase.build_payload(
        _command(
            to="",
            recipients=(Recipient(name="Ann", email="ann@a.com"),),
            sender=Recipient(name="", email="Boss@Work.com"),
        )
    )

    assert payload["sender"] == {"name": "boss@work.com", "email": "boss@work.com"}
    assert payload["recipients"] == [{"name": "Ann", "email": "ann@a.com"}]
    assert "threadId" not in payload


def test_sender_from_label_when_email_missing() -> None:
    payload = SendMessageUseCase.build_payload(
        _command(credential_label="Me <me@home.net>", credential_email="")
    )
    assert payload["sender"]["email"] == "me@home.net"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"credential_id": " "}, "Connect an email account first."),
        ({"credential_label": "Work", "credential_email": ""}, "Unable to determine sender email"),
        ({"to": "not-an-address"}, "Please provide at least one valid recipient."),
        ({"subject": "  "}, "Subject is required."),
        ({"body": ""}, "Body is required."),
    ],
)
def test_validation_messages(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        SendMessageUseCase.build_payload(_command(**overrides))
    assert exc_info.value.message.startswith(message)


@pytest.mark.asyncio
async def test_execute_sends_through_gateway() -> None:
    gateway = FakeEmailGateway()

    response = await SendMessageUseCase(gateway).execute(_command())

    assert response.body == {"id": "sent-1"}
    credential_id, payload = gateway.calls_to("send_message")[0]
    assert credential_id == "cred-1"
    assert payload["recipients"] == [{"name": "you@y.com", "email": "you@y.com"}]


@pytest.mark.asyncio
async def test_validation_failure_sends_nothing() -> None:
    gateway = FakeEmailGateway()

    with pytest.raises(ValidationError):
        await SendMessageUseCase(gateway).execute(_command(subject=""))

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_upstream_rejection_raises_with_upstream_message() -> None:
    gateway = FakeEmailGateway()
    gateway.send_response = UpstreamResponse(400, {"error": {"message": "Invalid recipient"}})

    with pytest.raises(UpstreamError) as exc_info:
        await SendMessageUseCase(gateway).execute(_command())

    assert exc_info.value.message == "Invalid recipient"
    assert exc_info.value.upstream_status == 400


@pytest.mark.asyncio
async def test_upstream_rejection_without_message() -> None:
    gateway = FakeEmailGateway()
    gateway.send_response = UpstreamResponse(503, {})

    with pytest.raises(UpstreamError, match=r"Failed to send email \(status 503\)\."):
        await SendMessageUseCase(gateway).execute(_command())
