import logging

import pytest

from attendance_sync import logger as layered


def _record(layer: str, message: str = "hello") -> logging.LogRecord:
    record = logging.LogRecord("test.layers", logging.INFO, __file__, 1, message, None, None)
    record.layer = layer
    return record


def test_public_helpers_are_the_ones_in_use():
    assert sorted(layered.__all__) == [
        "get_logger",
        "logger",
        "set_log_profile",
        "spinner",
        "step",
        "success",
    ]


@pytest.mark.parametrize(
    "layer,prefix",
    [
        ("step", "▶ "),
        ("success", "✓ "),
        ("warning", "! "),
        ("error", "✗ "),
        ("debug", "[debug] "),
        ("unknown", "• "),
    ],
)
def test_formatter_prefixes_layer_icon(monkeypatch, layer, prefix):
    monkeypatch.setenv("NO_COLOR", "1")
    formatter = layered.LayeredFormatter("%(message)s")

    assert formatter.format(_record(layer)) == f"{prefix}hello"


def test_adapter_tags_levels_with_their_layer(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="test.layers")
    adapter = layered.LayeredAdapter(logging.getLogger("test.layers"))

    adapter.debug("POST trace")
    adapter.info("plain")
    adapter.warning("careful")
    adapter.error("broken")

    assert [record.layer for record in caplog.records] == ["debug", "user", "warning", "error"]
