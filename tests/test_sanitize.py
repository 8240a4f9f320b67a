"""
Tests for the error sanitization boundary.
"""

import pytest

from conftest import pubkey
from core.errors import ChannelRetrievalError, GatewayError, NodeConfigurationError
from core.sanitize import sanitize_error, sanitize_message, sanitize_settings


class TestSanitizeMessage:

    @pytest.mark.parametrize("message, leaked", [
        ("TLS certificate file not found at: /home/alice/.lnd/tls.cert", "/home/alice"),
        ("open C:\\Users\\alice\\AppData\\Local\\Lnd\\tls.cert failed", "Users"),
        ("Could not reach https://user:pw@node.example:8080/v1/channels", "node.example"),
        ("connect to 192.168.1.20:10009 refused", "192.168.1.20"),
        ("dial localhost:8080: connection refused", "localhost:8080"),
        (f"node {pubkey(5)} not found", pubkey(5)),
        ("bad macaroon=0201036c6e64 supplied", "0201036c6e64"),
        ("token: abc.def.ghi rejected", "abc.def.ghi"),
    ])
    def test_strips_sensitive_parts(self, message, leaked):
        assert leaked not in sanitize_message(message)

    def test_keeps_plain_text(self):
        assert sanitize_message("channel list unavailable") == "channel list unavailable"

    def test_empty(self):
        assert sanitize_message("") == ""

    def test_path_placeholder(self):
        assert sanitize_message("missing /etc/lnd/readonly.macaroon") == "missing [PATH]"


class TestSanitizeError:

    def test_uses_kind_from_domain_errors(self):
        assert sanitize_error(ChannelRetrievalError("x")).kind == "channel_retrieval_failed"
        assert sanitize_error(NodeConfigurationError("x")).kind == "node_configuration_error"
        assert sanitize_error(GatewayError("x")).kind == "gateway_error"

    def test_falls_back_to_class_name(self):
        error = sanitize_error(KeyError("remote_pubkey"))
        assert error.kind == "KeyError"
        assert "remote_pubkey" in error.message

    def test_empty_message_uses_class_name(self):
        assert sanitize_error(TimeoutError()).message == "TimeoutError"

    def test_string_input(self):
        error = sanitize_error("failed at /var/lib/lnd/data")
        assert error.kind == "error"
        assert error.message == "failed at [PATH]"


class TestSanitizeSettings:

    def test_masks_secret_fields(self):
        values = {
            "lnd_host": "localhost",
            "lnd_macaroon_path": "/home/a/admin.macaroon",
            "lnd_tls_cert_path": "/home/a/tls.cert",
            "api_key": "k",
            "min_local_ratio": 0.1,
            "unset": None,
        }
        masked = sanitize_settings(values)

        assert masked["lnd_host"] == "localhost"
        assert masked["lnd_macaroon_path"] == "[REDACTED]"
        assert masked["lnd_tls_cert_path"] == "[REDACTED]"
        assert masked["api_key"] == "[REDACTED]"
        assert masked["min_local_ratio"] == 0.1
        assert masked["unset"] is None
