from __future__ import annotations

from pyvtrack._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = [
        {
            "id": "7",
            "name": "Ahmad",
            "token": "abc",
            "push_token": "ExponentPushToken[xyz]",
            "contact": {"phone": "+971500000000", "Email": "a@example.com"},
        }
    ]

    redacted = redact_for_log(payload)
    assert redacted[0]["name"] == "Ahmad"
    assert redacted[0]["token"] == "<redacted>"
    assert redacted[0]["push_token"] == "<redacted>"
    assert redacted[0]["contact"]["phone"] == "<redacted>"
    assert redacted[0]["contact"]["Email"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
