"""Tests for structlog configuration."""

import json

import pytest
import structlog

from amicus_api.core.log import configure_logging, resolve_level


@pytest.mark.parametrize("name, expected", [("debug", 10), ("INFO", 20), ("Warning", 30), ("error", 40)])
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_resolve_level_rejects_unknown():
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_json_format_emits_one_object_per_event(capsys, restore_logging):
    configure_logging("debug", "json")
    structlog.get_logger().debug("subscription.created", subscription_type="sms")

    line = capsys.readouterr().out.strip()
    event = json.loads(line)
    assert event["event"] == "subscription.created"
    assert event["level"] == "debug"
    assert event["subscription_type"] == "sms"
    assert "timestamp" in event


def test_text_format_filters_below_level(capsys, restore_logging):
    configure_logging("info", "text")
    log = structlog.get_logger()
    log.debug("hidden.event")
    log.info("app.starting", port=3000)

    out = capsys.readouterr().out
    assert "hidden.event" not in out
    assert "app.starting" in out


def test_json_format_includes_traceback(capsys, restore_logging):
    configure_logging("info", "json")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        structlog.get_logger().exception("subscription.unexpected_error")

    event = json.loads(capsys.readouterr().out.strip())
    assert "RuntimeError: boom" in event["exception"]
