# src/inputs/inputs.py
"""
Configuration loader for the real estate calculator suite.

Goals
-----
- Deterministic, file-first configuration with validation via Pydantic.
- Every threshold and heuristic constant is overridable; an absent file means defaults.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shape
--------------------
{
  "criteria": { "min_monthly_cash_flow": 250, "max_interest_rate_pct": 5 },
  "wholesale": { "max_offer_pct": 0.80 },
  "store_path": "data/real_estate_deals.json",
  "log_level": "INFO",
  "log_file": null
}

Environment overrides (optional)
--------------------------------
- RECALC_STORE      -> AppConfig.store_path
- RECALC_LOG_LEVEL  -> AppConfig.log_level
- RECALC_LOG_FILE   -> AppConfig.log_file

Public API
----------
- class ConfigLoader:
    - load(path: str | Path | None) -> AppConfig
    - load_json(text: str) -> AppConfig
    - with_overrides(cfg, **kwargs) -> AppConfig (non-destructive copies)
- function load_config(path: str | Path | None) -> AppConfig  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.schemas.models import CriteriaThresholds, WholesalePolicy
from src.store.deals import DEFAULT_STORE_PATH

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CONFIG_PATHS = (Path("calculator.json"), Path("config.json"))


class AppConfig(BaseModel):
    """
    Full configuration payload.

    Attributes:
        criteria:   Deal-criteria thresholds for creative-financing evaluation.
        wholesale:  MAO policy (percentages, fee rule, exit tiers, rehab table).
        store_path: JSON file backing the deal store.
        log_level:  Root level for the `src` logger.
        log_file:   Optional rotating log file.
    """

    model_config = ConfigDict(extra="forbid")

    criteria: CriteriaThresholds = Field(default_factory=CriteriaThresholds)
    wholesale: WholesalePolicy = Field(default_factory=WholesalePolicy)
    store_path: str = Field(str(DEFAULT_STORE_PATH), description="Path to the deal store JSON file.")
    log_level: str = Field("WARNING", description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL.")
    log_file: str | None = Field(None, description="Optional log file path.")


@dataclass(frozen=True)
class ConfigLoader:
    """
    File-first config loader with light env overrides.

    Default search (when path=None):
        1) ./calculator.json
        2) ./config.json
        3) built-in defaults
    """

    env_prefix: str = "RECALC_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppConfig:
        """
        Load config from a JSON file (path). If path is None, try defaults.

        Raises:
            FileNotFoundError when an explicit path does not exist.
            ValueError on invalid JSON or failed validation.
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p) if p is not None else {}
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppConfig:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Config payload must be a JSON object")
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppConfig,
        *,
        store_path: str | None = None,
        log_level: str | None = None,
        log_file: str | None = None,
    ) -> AppConfig:
        """
        Return a *new* AppConfig with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if store_path is not None:
            updates["store_path"] = store_path
        if log_level is not None:
            updates["log_level"] = self._normalize_level(log_level, cfg.log_level)
        if log_file is not None:
            updates["log_file"] = log_file

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Config file not found: {p}")
            return p

        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                return candidate
        return None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported config format for {p.name}; only .json is supported.")
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"{p} must hold a JSON object")
        return raw

    def _parse_root(self, data: dict[str, Any]) -> AppConfig:
        try:
            cfg = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Config validation failed:\n{e}") from e
        level = cfg.log_level.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Config validation failed: unknown log_level {cfg.log_level!r}")
        return cfg.model_copy(update={"log_level": level})

    @staticmethod
    def _normalize_level(value: str, fallback: str) -> str:
        level = value.strip().upper()
        return level if level in LOG_LEVELS else fallback

    def _apply_env_overrides(self, cfg: AppConfig) -> AppConfig:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        store = os.getenv(f"{prefix}STORE")
        if store:
            updates["store_path"] = store

        level = os.getenv(f"{prefix}LOG_LEVEL")
        if level:
            # Ignore unknown levels; keep validated cfg.log_level
            updates["log_level"] = self._normalize_level(level, cfg.log_level)

        log_file = os.getenv(f"{prefix}LOG_FILE")
        if log_file:
            updates["log_file"] = log_file

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Convenience wrapper for one-shot callers."""
    return ConfigLoader().load(path)
