from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from streamview.config import (
    AppConfig,
    EnvSettings,
    PipelineConfig,
    RescaleConfig,
    ViewConfig,
    build_aggregator,
    configure_logging,
    load_config,
)
from streamview.core.filters import Echo, TrendFlex
from streamview.core.rescaler import Rescaler
from streamview.utils.logging import PACKAGE_LOGGER


PIPELINE_YAML = """
views:
  - kind: trend_flex
    window_len: 16
    rescale:
      window_len: 64
  - kind: echo
    name: price
  - kind: trend_flex
    window_len: 8
    rescale:
      window_len: 32
      extrema: monotonic
"""


def test_defaults() -> None:
    vc = ViewConfig(kind="trend_flex")
    assert vc.window_len == 16
    assert vc.rescale is None
    assert RescaleConfig().extrema == "rescan"


def test_zero_window_rejected() -> None:
    with pytest.raises(ValidationError):
        ViewConfig(kind="echo", window_len=0)
    with pytest.raises(ValidationError):
        RescaleConfig(window_len=0)


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValidationError):
        ViewConfig(kind="cyber_cycle")


def test_build_aggregator_order() -> None:
    pipeline = PipelineConfig(
        views=[
            ViewConfig(kind="echo", name="raw"),
            ViewConfig(kind="trend_flex", window_len=10, rescale=RescaleConfig(window_len=20)),
        ]
    )
    agg = build_aggregator(pipeline)
    raw, scaled = agg.views
    assert isinstance(raw, Echo)
    assert isinstance(scaled, Rescaler)
    assert isinstance(scaled.inner, TrendFlex)
    assert scaled.window_len == 20
    assert agg.names == ["raw", "trend_flex_rescaled"]


def test_load_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "pipeline.yaml"
    path.write_text(PIPELINE_YAML, encoding="utf-8")
    cfg = AppConfig.load(path)
    assert [v.kind for v in cfg.pipeline.views] == ["trend_flex", "echo", "trend_flex"]
    assert cfg.pipeline.views[2].rescale is not None
    assert cfg.pipeline.views[2].rescale.extrema == "monotonic"
    agg = build_aggregator(cfg.pipeline)
    assert len(agg) == 3
    for v in [100.0, 101.0, 99.5]:
        agg.update(v)
    assert agg.snapshot()[1] == 99.5


def test_load_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "custom.yaml"
    path.write_text("views:\n  - kind: echo\n", encoding="utf-8")
    monkeypatch.setenv("STREAMVIEW_CONFIG", str(path))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    cfg = AppConfig.load()
    assert cfg.env.LOG_LEVEL == "DEBUG"
    assert len(cfg.pipeline.views) == 1


def test_load_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STREAMVIEW_CONFIG", raising=False)
    cfg = AppConfig.load()
    assert cfg.pipeline.views == []
    assert isinstance(cfg.env, EnvSettings)


def test_invalid_yaml_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "bad.yaml"
    path.write_text("views:\n  - kind: echo\n    window_len: 0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid pipeline config"):
        AppConfig.load(path)


def test_missing_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        AppConfig.load(tmp_path / "nope.yaml")


def test_load_config_applies_log_level(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "pipeline.yaml"
    path.write_text("views:\n  - kind: echo\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    log = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(log.handlers), log.level, log.propagate)
    stream = io.StringIO()
    try:
        cfg = load_config(path, stream=stream)
        assert log.level == logging.INFO
        assert len(cfg.pipeline.views) == 1
        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert any(line["message"] == "pipeline config loaded" and line["views"] == 1 for line in lines)
    finally:
        log.handlers[:] = saved[0]
        log.setLevel(saved[1])
        log.propagate = saved[2]


def test_configure_logging_uses_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    log = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(log.handlers), log.level, log.propagate)
    try:
        configure_logging(EnvSettings(), stream=io.StringIO())
        assert log.level == logging.ERROR
    finally:
        log.handlers[:] = saved[0]
        log.setLevel(saved[1])
        log.propagate = saved[2]
