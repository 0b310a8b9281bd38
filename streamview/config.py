from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Literal, Optional, TextIO

import yaml
from pydantic import BaseModel, Field, PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.aggregator import Aggregator
from .core.filters import FILTERS, build_view
from .core.rescaler import Rescaler
from .core.view import View
from .utils.logging import setup_logging


logger = logging.getLogger(__name__)


class RescaleConfig(BaseModel):
    """Wrap a view in a ``Rescaler`` mapping its output into [-1, 1]."""

    window_len: PositiveInt = Field(64, description="Trailing window used for min/max")
    extrema: Literal["rescan", "monotonic"] = Field(
        "rescan", description="Extrema tracker (see streamview.core.extrema)"
    )


class ViewConfig(BaseModel):
    kind: str = Field(..., description="Filter key (see streamview.core.filters)")
    window_len: PositiveInt = 16
    name: Optional[str] = None
    rescale: Optional[RescaleConfig] = None

    @field_validator("kind")
    @classmethod
    def _known_kind(cls, v: str) -> str:
        if v not in FILTERS:
            raise ValueError(f"unknown view kind {v!r}; expected one of {sorted(FILTERS)}")
        return v

    def build(self) -> View:
        view = build_view(self.kind, self.window_len)
        if self.rescale is not None:
            view = Rescaler(view, self.rescale.window_len, extrema=self.rescale.extrema)
        return view


class PipelineConfig(BaseModel):
    views: List[ViewConfig] = Field(default_factory=list)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"
    STREAMVIEW_CONFIG: Optional[Path] = None


class AppConfig(BaseModel):
    env: EnvSettings = Field(default_factory=EnvSettings)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)

    @staticmethod
    def load(config_path: Optional[Path] = None) -> "AppConfig":
        env = EnvSettings()  # loads from environment and .env

        pipeline = PipelineConfig()
        if config_path is None:
            config_path = env.STREAMVIEW_CONFIG
        if config_path is None:
            default_path = Path("streamview.yaml")
            config_path = default_path if default_path.exists() else None

        if config_path is not None:
            if not Path(config_path).exists():
                raise FileNotFoundError(f"Pipeline config not found: {config_path}")
            with open(config_path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            try:
                pipeline = PipelineConfig(**raw)
            except ValidationError as ve:
                raise ValueError(f"Invalid pipeline config: {ve}") from ve
            logger.info("pipeline config loaded", extra={"path": str(config_path), "views": len(pipeline.views)})

        return AppConfig(env=env, pipeline=pipeline)


def build_aggregator(pipeline: PipelineConfig) -> Aggregator:
    """Instantiate every configured view, in order, into a fresh aggregator."""
    agg = Aggregator()
    for vc in pipeline.views:
        agg.register(vc.build(), name=vc.name)
    return agg


def configure_logging(env: EnvSettings, stream: Optional[TextIO] = None) -> logging.Logger:
    return setup_logging(env.LOG_LEVEL, stream=stream)


def load_config(config_path: Optional[Path] = None, stream: Optional[TextIO] = None) -> AppConfig:
    """Load merged configuration from environment and optional YAML.

    Sets up the package logger at ``LOG_LEVEL`` before reading the pipeline
    file.
    """
    configure_logging(EnvSettings(), stream=stream)
    return AppConfig.load(config_path)
