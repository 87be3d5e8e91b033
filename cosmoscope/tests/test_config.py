"""
Tests for configuration and structured logging helpers.
"""

import json
import logging

from cosmoscope.config import DEFAULT_CONFIG, get_config, load_config
from cosmoscope.shared.logging import (
    StructuredFormatter,
    log_state_transition,
    setup_logging,
    split_tags,
)


class TestConfig:
    """Tests for configuration overrides."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.debounce_delay == 0.4
        assert DEFAULT_CONFIG.min_query_length == 3
        assert DEFAULT_CONFIG.geolocation_timeout == 10.0
        assert DEFAULT_CONFIG.world_zoom == 5
        assert DEFAULT_CONFIG.city_zoom == 12
        assert DEFAULT_CONFIG.default_sol == 3000

    def test_overrides_leave_default_untouched(self):
        config = get_config(debounce_delay=0.01, min_query_length=2)
        assert config.debounce_delay == 0.01
        assert config.min_query_length == 2
        assert DEFAULT_CONFIG.debounce_delay == 0.4

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("NASA_API_KEY", "secret")
        monkeypatch.setenv("COSMOSCOPE_MODEL", "gpt-test")
        config = load_config()
        assert config.nasa_api_key == "secret"
        assert config.model == "gpt-test"


class TestStructuredLogging:
    """Tests for the JSON formatter and state transition logs."""

    def test_state_transition_record(self):
        records = []

        class _Collector(logging.Handler):
            def emit(self, record):
                records.append(record)

        logger = logging.getLogger("cosmoscope.tests.transitions")
        logger.setLevel(logging.INFO)
        logger.addHandler(_Collector())
        state = {"mode": {"kind": "route_display"}, "zoom": 7, "center": {"lat": 1, "lng": 2}}

        log_state_transition("show_route", state, extra={"start": "Dhaka"}, logger=logger)

        entry = json.loads(StructuredFormatter().format(records[0]))
        assert entry["message"] == "State transition: show_route"
        assert entry["extra"]["state_summary"] == {
            "mode": "route_display",
            "zoom": 7,
            "center": {"lat": 1, "lng": 2},
        }
        assert entry["extra"]["extra"] == {"start": "Dhaka"}

    def test_tags_become_fields(self):
        record = logging.LogRecord(
            "cosmoscope.map", logging.WARNING, "", 0,
            "[context=earth] [component=map] Route lookup failed", (), None,
        )
        entry = json.loads(StructuredFormatter().format(record))
        assert entry["context"] == "earth"
        assert entry["component"] == "map"
        assert entry["message"] == "Route lookup failed"

    def test_split_tags_without_tags(self):
        assert split_tags("plain message") == ({}, "plain message")

    def test_setup_logging_installs_json_handler(self, tmp_path):
        log_file = tmp_path / "engine.log"
        logger = setup_logging(log_file=str(log_file), logger_name="cosmoscope.tests.setup")
        logger.info("[component=test] hello")
        for handler in logger.handlers:
            handler.flush()
        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert entry["component"] == "test"
        assert logging.getLogger("httpx").level == logging.WARNING
