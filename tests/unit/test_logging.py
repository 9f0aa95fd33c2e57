"""Tests for log event redaction."""

from quirknotes.logging import REDACTED, redact_sensitive


class TestRedactSensitive:
    def test_credentials_replaced(self):
        event = {"event": "login_failed", "username": "alice", "password": "pw1", "token": "abc"}
        result = redact_sensitive(None, "info", event)
        assert result == {"event": "login_failed", "username": "alice", "password": REDACTED, "token": REDACTED}

    def test_other_keys_untouched(self):
        event = {"event": "note_created", "note_id": "n1", "owner": "alice"}
        assert redact_sensitive(None, "info", dict(event)) == event
