"""Config loader from env + yaml."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from phish_triage.core.errors import ConfigError
from phish_triage.evidence.models import RedactionOptions
from phish_triage.scoring.models import RuleSet

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"

_REDACTION_FLAGS = (
    "redact_emails",
    "redact_phones",
    "redact_credit_cards",
    "redact_ssn",
    "redact_names",
)


class AppConfig(BaseModel):

    log_level: str = Field(default="WARNING")
    hash_workers: int = Field(default=4)
    redaction: dict[str, Any] = Field(default_factory=dict)
    scoring: dict[str, Any] = Field(default_factory=dict)
    default_config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))

    def redaction_options(self) -> RedactionOptions:
        try:
            return RedactionOptions.model_validate(self.redaction)
        except ValidationError as exc:
            raise ConfigError(f"invalid redaction settings: {exc}") from exc

    def rule_set(self) -> RuleSet:
        try:
            return RuleSet.model_validate(self.scoring)
        except (ValidationError, ValueError, TypeError) as exc:
            raise ConfigError(f"invalid scoring settings: {exc}") from exc


def load_yaml(path: str | Path, *, required: bool = False) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        if required:
            raise ConfigError(f"config file not found: {p}")
        return {}
    try:
        payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config file {p}: {exc}") from exc
    return payload if isinstance(payload, dict) else {}


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(name)
    return value if value not in (None, "") else fallback


def _parse_int(raw: Any, fallback: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


def _parse_bool(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return fallback
    value = str(raw).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return fallback


def _parse_str(raw: Any, fallback: str) -> str:
    value = str(raw if raw is not None else "").strip()
    return value or fallback


def _parse_patterns(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return [item for item in raw.split("\n") if item.strip()]
    if isinstance(raw, list):
        return [str(item) for item in raw if str(item).strip()]
    return []


def _resolve_default_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_default_path = os.getenv("PHISH_TRIAGE_DEFAULT_CONFIG_PATH")
    if env_default_path:
        return Path(env_default_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> tuple[AppConfig, dict[str, Any]]:
    default_path = _resolve_default_config_path(path)
    merged = load_yaml(default_path, required=default_path != DEFAULT_CONFIG_PATH)
    raw_redaction = merged.get("redaction")
    redaction_cfg = raw_redaction if isinstance(raw_redaction, dict) else {}
    raw_scoring = merged.get("scoring")
    scoring_cfg = raw_scoring if isinstance(raw_scoring, dict) else {}

    redaction: dict[str, Any] = {
        flag: _parse_bool(
            _pick_env(f"PHISH_TRIAGE_{flag.upper()}", redaction_cfg.get(flag, True)),
            True,
        )
        for flag in _REDACTION_FLAGS
    }
    redaction["custom_patterns"] = _parse_patterns(
        _pick_env("PHISH_TRIAGE_CUSTOM_PATTERNS", redaction_cfg.get("custom_patterns", []))
    )

    payload = {
        "log_level": _parse_str(_pick_env("PHISH_TRIAGE_LOG_LEVEL", merged.get("log_level")), "WARNING").upper(),
        "hash_workers": _parse_int(_pick_env("PHISH_TRIAGE_HASH_WORKERS", merged.get("hash_workers")), 4),
        "redaction": redaction,
        "scoring": scoring_cfg,
        "default_config_path": str(default_path),
    }
    return AppConfig.model_validate(payload), merged
