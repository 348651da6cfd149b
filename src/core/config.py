from __future__ import annotations
import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.errors import ConfigError

FEATURIZERS = ('tfidf', 'hashing')
KEY_ORDERS = ('occurrence', 'value')


@dataclass(frozen=True)
class IntentConfig:
    data_path: str = "intents.csv"
    log_path: str = "low_confidence.log"
    threshold: float = 0.6  # max score below this is logged for review
    seed: Optional[int] = None  # None leaves the trainer unseeded
    featurizer: str = "tfidf"
    key_order: str = "occurrence"  # label key space: first occurrence or sorted value
    max_iter: int = 1000
    c: float = 1.0  # inverse L2 regularization strength
    hash_features: int = 2**18
    show_scores: bool = False  # print per-label breakdown sorted by score
    has_header: bool = True
    separator: str = ","


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a JSON object whose keys map onto IntentConfig fields."""
    try:
        data = json.loads(Path(path).read_text(encoding='utf-8'))
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object, got {type(data).__name__}")
    return data


def validate(cfg: IntentConfig) -> IntentConfig:
    if not 0.0 <= cfg.threshold <= 1.0:
        raise ConfigError(f"threshold must be within [0, 1], got {cfg.threshold}")
    if cfg.featurizer not in FEATURIZERS:
        raise ConfigError(f"featurizer must be one of {FEATURIZERS}, got {cfg.featurizer!r}")
    if cfg.key_order not in KEY_ORDERS:
        raise ConfigError(f"key_order must be one of {KEY_ORDERS}, got {cfg.key_order!r}")
    if cfg.max_iter <= 0:
        raise ConfigError(f"max_iter must be positive, got {cfg.max_iter}")
    if cfg.c <= 0:
        raise ConfigError(f"c must be positive, got {cfg.c}")
    if cfg.hash_features <= 0:
        raise ConfigError(f"hash_features must be positive, got {cfg.hash_features}")
    if len(cfg.separator) != 1:
        raise ConfigError(f"separator must be a single character, got {cfg.separator!r}")
    return cfg


def build_config(file_values: Optional[Mapping[str, Any]] = None, overrides: Optional[Mapping[str, Any]] = None) -> IntentConfig:
    """Merge config file values with CLI overrides (overrides win, None means unset)."""
    valid_fields = {f.name for f in fields(IntentConfig)}
    merged: Dict[str, Any] = {}
    for source in (file_values or {}, overrides or {}):
        for k, v in source.items():
            if k in valid_fields and v is not None:
                merged[k] = v
    try:
        cfg = IntentConfig(**merged)
    except TypeError as e:  # pragma: no cover - guarded by field filter
        raise ConfigError(str(e)) from e
    return validate(cfg)


__all__ = ['IntentConfig', 'load_config_file', 'build_config', 'validate', 'FEATURIZERS', 'KEY_ORDERS']
