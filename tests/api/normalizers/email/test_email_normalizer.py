"""Testes do normalizer de email."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from api.normalizers.email import (
    derive_credential_email,
    extract_body_text,
    extract_email_address,
    extract_next_cursor,
    extract_sender_details,
    merge_recipients,
    normalize_credential,
    normalize_message,
    parse_received_at,
    parse_recipients,
    truncate_body,
)
from app.protocols.models import NO_SUBJECT, UNKNOWN_SENDER, Recipient


class TestEmailExtraction:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Jane Doe <Jane@Example.com>", "jane@example.com"),
            (["nobody", {"email": "b@y.io"}], "b@y.io"),
            ({"profile": {"email": "c@z.org"}}, "c@z.org"),
            ("no address here", ""),
            (None, ""),
            (42, ""),
        ],
    )
    def test_extract_email_address(self, value: object, expected: str) -> None:
        assert extract_email_address(value) == expected

    @pytest.mark.parametrize("value", ["Jane Doe <Jane@Example.com>", "x", {"email": "a@b.co"}])
    def test_extract_email_address_is_idempotent(self, value: object) -> None:
        once = extract_email_address(value)
        assert extract_email_address(once) == once

    def test_sender_details_from_object(self) -> None:
        details = extract_sender_details({"name": "Jane Doe", "email": "jane@example.com"})
        assert details.display == "Jane Doe <jane@example.com>"
        assert details.email == "jane@example.com"

    def test_sender_details_from_string(self) -> None:
        details = extract_sender_details("Jane Doe <jane@example.com>")
        assert details.display == "Jane Doe <jane@example.com>"
        assert details.email == "jane@example.com"


class TestBodyText:
    def test_strips_html_from_snippet(self) -> None:
        text = extract_body_text({"subject": "hi", "snippet": "<b>Hello</b> world"})
        assert text == "Hello world"

    def test_br_becomes_newline_and_entities_decoded(self) -> None:
        assert extract_body_text({"body": "a<br/>b &amp; c"}) == "a\nb & c"

    def test_skips_blank_candidates_and_joins_fragments(self) -> None:
        message = {"body": "   ", "fragments": ["one", None, "two"]}
        assert extract_body_text(message) == "one\n\ntwo"

    def test_original_snippet(self) -> None:
        assert extract_body_text({"original": {"email": {"snippet": "deep"}}}) == "deep"

    def test_nothing_found(self) -> None:
        assert extract_body_text({"subject": "only"}) == ""
        assert extract_body_text("not a dict") == ""

    def test_truncate_body(self) -> None:
        assert truncate_body("short") == "short"
        truncated = truncate_body("x" * 300)
        assert len(truncated) == 280
        assert truncated.endswith("…")


class TestNormalizeMessage:
    def test_full_message(self) -> None:
        message = normalize_message(
            {
                "id": 17,
                "threadId": "t-1",
                "subject": "Quarterly report",
                "from": {"name": "Jane Doe", "email": "jane@example.com"},
                "snippet": "Numbers attached",
                "receivedAt": "2024-05-01T10:00:00Z",
                "body": "<p>Numbers attached</p>",
            }
        )

        assert message.id == "17"
        assert message.thread_id == "t-1"
        assert message.from_display == "Jane Doe <jane@example.com>"
        assert message.from_email == "jane@example.com"
        assert message.body == "Numbers attached"
        assert message.as_dict()["from"] == "Jane Doe <jane@example.com>"

    def test_fallbacks(self) -> None:
        message = normalize_message({}, index=3)
        assert message.id == "message-3"
        assert message.subject == NO_SUBJECT
        assert message.from_display == UNKNOWN_SENDER

    def test_subject_falls_back_to_snippet(self) -> None:
        assert normalize_message({"snippet": "preview text"}).subject == "preview text"

    def test_non_dict_input(self) -> None:
        message = normalize_message("raw", index=1)
        assert message.id == "message-1"
        assert message.subject == "raw"
        assert message.from_display == UNKNOWN_SENDER

    def test_numeric_received_at(self) -> None:
        assert normalize_message({"internalDate": 1714557600000}).received_at == "1714557600000"

    def test_idempotent_on_canonical_form(self) -> None:
        first = normalize_message(
            {"id": "m1", "subject": "Hi", "from": "Jane <jane@example.com>", "snippet": "x"}
        )
        second = normalize_message(first.as_dict())
        assert second == first


class TestReceivedAt:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-05-01T10:00:00+00:00",
            "2024-05-01T10:00:00",
            "Wed, 01 May 2024 10:00:00 +0000",
            "1714557600",
            "1714557600000",
        ],
    )
    def test_formats(self, value: str) -> None:
        assert parse_received_at(value) == datetime(2024, 5, 1, 10, 0, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["", "yesterday", None])
    def test_unparseable(self, value: object) -> None:
        assert parse_received_at(value) is None

    @pytest.mark.parametrize(
        "value",
        ["²", "١٧١٤٥٥٧٦٠٠", "1" * 400, "9" * 5000, 10**400, 1714557600.5, [], {}],
    )
    def test_hostile_values_return_none(self, value: object) -> None:
        assert parse_received_at(value) is None


class TestRecipients:
    def test_parse_recipients(self) -> None:
        recipients = parse_recipients("a@x.com; Bob <B@y.com>\nnot-an-email, ")
        assert recipients == [
            Recipient(name="a@x.com", email="a@x.com"),
            Recipient(name="Bob", email="b@y.com"),
        ]

    def test_merge_removes_duplicates(self) -> None:
        merged = merge_recipients(parse_recipients("a@x.com"), parse_recipients("A@x.com, c@z.com"))
        assert [recipient.email for recipient in merged] == ["a@x.com", "c@z.com"]


class TestCredentials:
    def test_normalize_credential(self) -> None:
        profile = normalize_credential(
            {"id": "cred-1", "appKey": "gmail", "profile": {"accountName": "Work", "email": "me@work.com"}}
        )
        assert profile is not None
        assert profile.as_dict() == {
            "id": "cred-1",
            "label": "Work",
            "email": "me@work.com",
            "appKey": "gmail",
        }

    def test_email_from_label_fallback(self) -> None:
        assert derive_credential_email({"id": "c"}, "Me <me@home.net>") == "me@home.net"

    def test_credential_without_id(self) -> None:
        assert normalize_credential({"label": "x"}) is None
        assert normalize_credential("x") is None


class TestCursor:
    def test_extract_next_cursor(self) -> None:
        assert extract_next_cursor({"_metadata": {"next": "abc"}}) == "abc"
        assert extract_next_cursor({"_metadata": {"next": ""}}) == ""
        assert extract_next_cursor([]) == ""


class TestHostileInput:
    @pytest.mark.parametrize(
        "raw",
        [
            {"id": 10**5000, "receivedAt": 10**400},
            {"id": True, "from": 10**400, "receivedAt": float("inf")},
            {"messageId": "m", "sender": ["²", None, 3], "sentAt": "²"},
            {"id": "m", "fragments": [10**5000, "ok"], "internalDate": -(10**30)},
            {"id": "m", "from": {"email": 10**400, "name": []}, "receivedAt": "9" * 5000},
        ],
    )
    def test_normalize_message_never_raises(self, raw: dict) -> None:
        message = normalize_message(raw, index=4)

        assert message.id
        assert message.subject
        assert message.from_display
        assert parse_received_at(message.received_at) is None

    def test_huge_integer_id_falls_back_to_index(self) -> None:
        assert normalize_message({"id": 10**5000}, index=2).id == "message-2"

    def test_huge_integer_receivedat_is_dropped(self) -> None:
        message = normalize_message({"id": "m", "receivedAt": 10**400, "sentAt": 1714557600})
        assert message.received_at == "1714557600"

    def test_non_dict_huge_integer(self) -> None:
        message = normalize_message(10**5000, index=1)
        assert message.id == "message-1"
        assert message.subject == NO_SUBJECT
