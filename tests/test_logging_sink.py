"""
Tests for the stdlib/Rich structured logging adapter.
"""

import logging

from adapters.logging_sink import LOGGER_NAME, FieldsFormatter, StdlibEventLogger, configure_logging
from core.interfaces.event_log import EventLogger, NullEventLogger


class TestStdlibEventLogger:

    def test_fields_attached_to_record(self, caplog):
        logger = logging.getLogger("ln_channel_query.test")
        with caplog.at_level(logging.INFO, logger="ln_channel_query.test"):
            StdlibEventLogger(logger).log(
                logging.INFO,
                "Channel query completed",
                {"request_id": "req-1", "channel_count": 2, "dropped": None},
            )

        record = caplog.records[-1]
        assert record.getMessage() == "Channel query completed"
        assert record.fields == {"request_id": "req-1", "channel_count": 2}

    def test_satisfies_protocol(self):
        assert isinstance(StdlibEventLogger(), EventLogger)
        assert isinstance(NullEventLogger(), EventLogger)


class TestFieldsFormatter:

    def test_appends_fields(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "done", None, None)
        record.fields = {"request_id": "req-1", "duration_ms": 5}
        assert FieldsFormatter("%(message)s").format(record) == "done [request_id=req-1 duration_ms=5]"

    def test_without_fields(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "done", None, None)
        assert FieldsFormatter("%(message)s").format(record) == "done"


class TestConfigureLogging:

    def test_single_handler(self):
        configure_logging("debug")
        logger = configure_logging("warning")
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert logger.propagate is False
