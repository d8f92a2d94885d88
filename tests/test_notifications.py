"""Tests for notification sinks"""
import logging
from unittest.mock import Mock

from shopcart.services.notifications import LoggingNotificationSink, RecordingNotificationSink


def test_recording_sink_keeps_order():
    sink = RecordingNotificationSink()

    sink.error("first")
    sink.error("second")

    assert sink.messages == ["first", "second"]
    sink.clear()
    assert sink.messages == []


def test_recording_sink_forwards_to_callback():
    callback = Mock()
    sink = RecordingNotificationSink(callback=callback)

    sink.error("out of stock")

    callback.assert_called_once_with("out of stock")


def test_recording_sink_survives_callback_failure():
    sink = RecordingNotificationSink(callback=Mock(side_effect=RuntimeError("widget gone")))

    sink.error("message")

    assert sink.messages == ["message"]


def test_logging_sink_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="shopcart.services.notifications"):
        LoggingNotificationSink().error("Erro na adição do produto\nforged line")

    assert len(caplog.records) == 1
    assert "Erro na adição do produto\\nforged line" in caplog.text
