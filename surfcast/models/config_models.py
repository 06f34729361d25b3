from __future__ import annotations

from dataclasses import dataclass, field

from .window_policy import Unrestricted, WindowPolicy

"""Config dataclasses for the surf-forecast ingestion pipeline.

PipelineConfig is the only configuration the pure pipeline sees.
AppConfig wraps it with the settings used by the batch runner and CLI;
it is produced by surfcast.config.loader from config/surfcast.yml.
"""

__all__ = [
    "DEFAULT_ZONE_OFFSET_HOURS",
    "PipelineConfig",
    "AppConfig",
]

# ソースデータは JST (UTC+9) 固定
DEFAULT_ZONE_OFFSET_HOURS = 9


@dataclass(frozen=True)
class PipelineConfig:
    """Options recognized by load_forecast.

    Hashable so it can be part of a cache key.
    """
    window_policy: WindowPolicy = field(default_factory=Unrestricted)
    source_zone_offset_hours: int = DEFAULT_ZONE_OFFSET_HOURS


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for batch runs and the inspect CLI."""
    source_directory: str  # Directory scanned for *.csv files
    pipeline: PipelineConfig  # Options passed to every pipeline invocation
    sources: tuple[str, ...] = ()  # Extra paths / http(s) URLs
    cache_ttl_seconds: float = 300.0
    request_timeout_seconds: float = 20.0
