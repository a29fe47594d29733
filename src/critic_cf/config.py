from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ..paths import resolve_config_path
from .errors import InvalidArgument
from .similarity import METRICS

logger = logging.getLogger(__name__)

CONFIG_SECTION = "recommender"


@dataclass(frozen=True)
class RecommendConfig:
    metric: str = "euclidean"
    top_n: int = 10
    strict: bool = False          # re-raise DegenerateInputError instead of zeroing the peer
    exclude_rated: bool = False   # rank only items the target has not rated
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if str(self.metric).lower() not in METRICS:
            raise InvalidArgument(f"Unknown similarity metric {self.metric!r}; choose from {sorted(METRICS)}")
        if int(self.top_n) < 0:
            raise InvalidArgument(f"top_n must be >= 0, got {self.top_n}")


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{CONFIG_SECTION}.{name} must be a boolean, got {value!r}")


def load_recommend_config(path: Path | str | None = None) -> RecommendConfig:
    """Read the `recommender:` section of config.yaml into a RecommendConfig.

    Missing keys fall back to the dataclass defaults; unknown keys are ignored.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    cfg_yaml = yaml.safe_load(config_path.read_text())
    if cfg_yaml is None:
        cfg_yaml = {}
    if not isinstance(cfg_yaml, dict):
        raise ValueError(f"Expected YAML mapping at {config_path}, got {type(cfg_yaml)}")

    raw = cfg_yaml.get(CONFIG_SECTION, {})
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"`{CONFIG_SECTION}` in {config_path} must be a mapping")

    known = {f.name for f in fields(RecommendConfig)}
    ignored = sorted(set(raw) - known)
    if ignored:
        logger.warning("Ignoring unknown %s keys in %s: %s", CONFIG_SECTION, config_path, ignored)

    defaults = RecommendConfig()
    return RecommendConfig(
        metric=str(raw.get("metric", defaults.metric)).lower(),
        top_n=int(raw.get("top_n", defaults.top_n)),
        strict=_parse_bool("strict", raw.get("strict", defaults.strict)),
        exclude_rated=_parse_bool("exclude_rated", raw.get("exclude_rated", defaults.exclude_rated)),
        log_level=str(raw.get("log_level", defaults.log_level)).upper(),
    )
