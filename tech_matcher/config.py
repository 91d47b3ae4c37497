from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from tech_matcher.errors import ConfigError


class Weights(BaseModel):
    skill_coverage: float = 40.0
    primary_specialization: float = 10.0

    service_area_match: float = 20.0
    service_area_miss: float = -15.0

    available: float = 15.0
    emergency: float = 5.0
    busy: float = -20.0

    # complex/expert jobs only
    experienced: float = 10.0
    inexperienced: float = -10.0

    high_rating: float = 5.0
    high_first_time_fix: float = 5.0
    idle: float = 5.0


class Thresholds(BaseModel):
    high_rating: float = 4.5
    high_first_time_fix: float = 90.0
    experienced_years: int = 5


class Scoring(BaseModel):
    weights: Weights = Field(default_factory=Weights)
    thresholds: Thresholds = Field(default_factory=Thresholds)


class Matching(BaseModel):
    default_max_jobs_per_day: int = 8
    max_results: int = 10


class Output(BaseModel):
    dir: str = "data/results"
    explain: bool = True


class Logging(BaseModel):
    level: str = "INFO"
    log_dir: Optional[str] = None


class Config(BaseModel):
    version: int = 1
    scoring: Scoring = Field(default_factory=Scoring)
    matching: Matching = Field(default_factory=Matching)
    output: Output = Field(default_factory=Output)
    logging: Logging = Field(default_factory=Logging)


def default_config() -> Config:
    return Config()


def validate_config(cfg: Config) -> Config:
    w = cfg.scoring.weights

    # skill coverage has to grow with overlap, otherwise ranking inverts
    if w.skill_coverage <= 0:
        raise ConfigError(f"scoring.weights.skill_coverage must be positive (got {w.skill_coverage})")
    if w.service_area_miss > w.service_area_match:
        raise ConfigError("scoring.weights.service_area_miss must not exceed service_area_match")
    if w.busy > w.available:
        raise ConfigError("scoring.weights.busy must not exceed available")
    if w.inexperienced > w.experienced:
        raise ConfigError("scoring.weights.inexperienced must not exceed experienced")
    if cfg.matching.default_max_jobs_per_day <= 0:
        raise ConfigError(
            f"matching.default_max_jobs_per_day must be positive (got {cfg.matching.default_max_jobs_per_day})"
        )
    if cfg.matching.max_results <= 0:
        raise ConfigError(f"matching.max_results must be positive (got {cfg.matching.max_results})")

    return cfg


def load_config(path: str | Path) -> Config:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping: {p}")

    try:
        cfg = Config(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {p}: {e}") from e

    return validate_config(cfg)
