import io

from loguru import logger

from rosterboard.logging.setup import (
    MAX_EXTRA_VALUE_LENGTH,
    console_format,
    shorten_value,
)
from rosterboard.normalization.normalizer import Normalizer


def test_shorten_value_cuts_long_strings_without_touching_input():
    extra = {"body": "a" * 1000, "nested": {"k": "b" * 500}, "short": "ok"}
    shortened = shorten_value(extra)

    assert shortened["body"].startswith("a" * MAX_EXTRA_VALUE_LENGTH)
    assert shortened["body"].endswith("(1000 chars)")
    assert shortened["nested"]["k"].endswith("(500 chars)")
    assert shortened["short"] == "ok"
    assert extra["body"] == "a" * 1000


def test_console_format_leaves_record_untouched():
    record = {"message": "x", "extra": {"body": "a" * 1000}}
    template = console_format(record)
    assert "(1000 chars)" in template
    assert template.endswith("\n{exception}")
    assert record["extra"]["body"] == "a" * 1000


def test_console_format_escapes_braces_and_tags():
    template = console_format({"extra": {"record": {"Nazwa": "<b>"}}})
    assert "{{" in template and "}}" in template
    assert r"\<b>" in template


def test_other_sinks_receive_full_bound_values():
    console = io.StringIO()
    captured = []
    console_id = logger.add(console, format=console_format, colorize=False)
    capture_id = logger.add(lambda message: captured.append(message.record["extra"]["body"]))
    try:
        logger.bind(body="z" * 1000).info("payload received")
    finally:
        logger.remove(console_id)
        logger.remove(capture_id)

    assert "(1000 chars)" in console.getvalue()
    assert "payload received" in console.getvalue()
    assert captured == ["z" * 1000]


def test_skipped_row_emits_structured_event():
    events = []
    sink_id = logger.add(lambda message: events.append(message.record), level="WARNING")
    try:
        Normalizer().normalize([{"Nazwa": "Orły", "Klasa": ""}])
    finally:
        logger.remove(sink_id)

    skipped = [e for e in events if e["extra"].get("event") == "row_skipped"]
    assert len(skipped) == 1
    assert skipped[0]["extra"]["row_index"] == 0
