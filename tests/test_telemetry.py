from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pytest

from indexed_text.runtime import TelemetrySettings, telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Optional[Dict[str, str]]]] = []
        self.context: Dict[str, str] = {}
        self.profiles: List[str] = []
        self.components: List[str] = []

    def info_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("error", message, dict(pairs)))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message, None))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiles.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield


class FakeConfig:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Any:
        def record(*args: Any) -> "FakeConfig":
            self.calls.append((name, args))
            return self

        return record


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    logger = FakeLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


@pytest.fixture
def fake_telelog(monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    created: List[Tuple[str, Any]] = []

    def with_config(name: str, config: Any) -> SimpleNamespace:
        created.append((name, config))
        return SimpleNamespace(name=name)

    module = SimpleNamespace(
        Config=FakeConfig,
        Logger=SimpleNamespace(with_config=with_config),
        created=created,
    )
    monkeypatch.setattr(telemetry, "tl", module)
    monkeypatch.setattr(telemetry, "_SETTINGS", None)
    monkeypatch.setattr(telemetry, "_CONFIG", None)
    monkeypatch.setattr(telemetry, "_LOGGERS", {})
    return module


def test_record_event_sends_structured_pairs(fake_logger: FakeLogger) -> None:
    telemetry.record_event("text::decode_failed", data={"position": 3})

    assert fake_logger.records == [
        (
            "info",
            "event::text::decode_failed",
            {"event": "text::decode_failed", "position": "3"},
        )
    ]


def test_record_event_falls_back_to_plain_method(fake_logger: FakeLogger) -> None:
    telemetry.record_event("text::materialize", level="debug", data={"start": 1})

    level, message, pairs = fake_logger.records[0]
    assert level == "debug"
    assert message.startswith("event::text::materialize ")
    assert "'start': 1" in message
    assert pairs is None


def test_record_event_rejects_unknown_levels(fake_logger: FakeLogger) -> None:
    with pytest.raises(ValueError, match="Unsupported log level"):
        telemetry.record_event("text::decode", level="critical")


def test_span_profiles_tracks_and_scopes_context(fake_logger: FakeLogger) -> None:
    with telemetry.span("text::decode", component=True, metadata={"size": 5}) as handle:
        assert fake_logger.context == {"size": "5"}
        handle.add_metadata("extra", [1, 2])
        assert handle.metadata == {"size": "5", "extra": "[1, 2]"}

    assert fake_logger.context == {}
    assert fake_logger.profiles == ["text::decode"]
    assert fake_logger.components == ["text::decode"]
    assert fake_logger.records == []


def test_span_with_named_component(fake_logger: FakeLogger) -> None:
    with telemetry.span("text::encode", component="indexed_text"):
        pass
    with telemetry.span("text::encode", component=False):
        pass

    assert fake_logger.components == ["indexed_text"]
    assert fake_logger.profiles == ["text::encode", "text::encode"]


def test_span_reports_failure_and_reraises(fake_logger: FakeLogger) -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("text::decode", metadata={"size": 2}):
            raise RuntimeError("boom")

    assert fake_logger.records == [
        ("error", "span::fail", {"span": "text::decode", "size": "2", "reason": "boom"})
    ]
    assert fake_logger.context == {}


def test_build_config_translates_settings(fake_telelog: SimpleNamespace) -> None:
    settings = TelemetrySettings(
        level="debug",
        console=False,
        log_file="out.log",
        buffered=True,
        buffer_size=64,
        profiling=False,
    )

    config = telemetry.build_config(settings)

    assert config.calls == [
        ("with_min_level", ("DEBUG",)),
        ("with_console_output", (False,)),
        ("with_file_output", ("out.log",)),
        ("with_buffering", (True,)),
        ("with_buffer_size", (64,)),
        ("with_profiling", (False,)),
    ]


def test_configure_resets_logger_cache(fake_telelog: SimpleNamespace) -> None:
    telemetry.configure(TelemetrySettings(logger_name="first"))
    first = telemetry.get_logger()

    assert telemetry.get_logger("first") is first
    assert first.name == "first"

    telemetry.configure(TelemetrySettings(logger_name="second"))

    assert telemetry.get_logger().name == "second"
    assert telemetry.get_logger("first") is not first
    assert [name for name, _ in fake_telelog.created] == ["first", "second", "first"]


def test_configure_with_preset(fake_telelog: SimpleNamespace) -> None:
    settings = telemetry.configure(preset="quiet")

    assert settings.level == "WARNING"
    assert telemetry.current_settings() is settings


def test_configure_rejects_settings_and_preset_together(
    fake_telelog: SimpleNamespace,
) -> None:
    with pytest.raises(ValueError, match="not both"):
        telemetry.configure(TelemetrySettings(), preset="quiet")
