"""Tests for emitter settings and logging setup."""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from param_emitter.config.logging import PACKAGE_LOGGER, configure_logging, get_logger
from param_emitter.config.settings import EmitterSettings, get_settings
from param_emitter.emitter import EventEmitter


@pytest.mark.unit
class TestEmitterSettings:
    """Tests for EmitterSettings."""

    def test_defaults(self) -> None:
        settings = EmitterSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.sort_payload_keys is False

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("PARAM_EMITTER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PARAM_EMITTER_SORT_PAYLOAD_KEYS", "1")

        settings = EmitterSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.sort_payload_keys is True

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestLogging:
    """Tests for configure_logging."""

    def teardown_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)

    def test_configure_with_level(self) -> None:
        configure_logging("warning")

        assert structlog.is_configured()
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_configure_from_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("PARAM_EMITTER_LOG_LEVEL", "ERROR")

        configure_logging()

        assert structlog.is_configured()
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging("chatty")

    def test_emitter_logs_registry_changes(self) -> None:
        emitter = EventEmitter(sort_keys=False)
        with capture_logs() as logs:
            emitter.on("saved", {"id": 1}, lambda event, params, data: None)
            emitter.emit("saved", {"id": 1}, None)
            emitter.off("saved", {"id": 1})
            emitter.off()

        events = [entry["event"] for entry in logs]
        assert events == [
            "emitter.subscribed",
            "emitter.dispatched",
            "emitter.unsubscribed",
            "emitter.cleared",
        ]
        assert logs[0]["event_name"] == "saved"
        assert logs[0]["once"] is False
        assert logs[0]["params_key"] == '{"id":1}'
        assert logs[1]["event_name"] == "saved"
        assert logs[1]["dispatched"] == 1
        assert logs[2]["event_name"] == "saved"
        assert logs[2]["removed"] == 1

    def test_unconfigured_emitter_is_silent(self, capsys) -> None:
        emitter = EventEmitter(sort_keys=False)

        unsubscribe = emitter.on("saved", lambda event, data: None)
        emitter.once("saved", {"id": 1}, lambda event, params, data: None)
        emitter.emit("saved", {"id": 1}, "data")
        unsubscribe()
        emitter.off()

        out, err = capsys.readouterr()
        assert out == ""
        assert err == ""

    def test_configured_debug_goes_through_stdlib(self, caplog) -> None:
        configure_logging("debug")
        emitter = EventEmitter(sort_keys=False)

        with caplog.at_level(logging.DEBUG, logger=PACKAGE_LOGGER):
            emitter.on("saved", lambda event, data: None)

        assert any("emitter.subscribed" in record.getMessage() for record in caplog.records)
        assert all(record.name == "param_emitter.emitter" for record in caplog.records)

    def test_get_logger(self) -> None:
        assert get_logger(__name__) is not None
