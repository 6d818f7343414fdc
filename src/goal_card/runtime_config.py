"""Runtime configuration loader (config-first, flag-overrides)."""

from __future__ import annotations

import math
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"
DEFAULT_LOCAL_OVERRIDE_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.local.toml"


@dataclass(frozen=True)
class ScannerConfig:
    """Placeholder user-model knobs for quotes with no card probability."""

    user_bias: float = 0.04
    user_weight: float = 0.7
    assist_weight: float = 0.3
    clamp_below: float = 0.07
    clamp_above: float = 0.15
    near_miss_limit: int = 8


@dataclass(frozen=True)
class ProviderConfig:
    """One configured prior provider."""

    source: str
    credential: str
    url: str = ""
    auth_header: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    weight: float = 0.0
    tempo: float = 2.55
    home_attack_rel: float = 1.0
    away_attack_rel: float = 1.0
    home_defense_rel: float = 1.0
    away_defense_rel: float = 1.0
    note: str = ""


@dataclass(frozen=True)
class RuntimeConfig:
    """Materialized runtime configuration."""

    config_path: Path
    anchor_weight: float = 0.40
    provider_timeout_s: float = 6.0
    provider_max_workers: int = 4
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    providers: tuple[ProviderConfig, ...] = ()


_CURRENT_RUNTIME_CONFIG: RuntimeConfig | None = None


def set_current_runtime_config(config: RuntimeConfig | None) -> None:
    global _CURRENT_RUNTIME_CONFIG
    _CURRENT_RUNTIME_CONFIG = config


def current_runtime_config() -> RuntimeConfig:
    config = _CURRENT_RUNTIME_CONFIG
    if config is not None:
        return config
    loaded = load_runtime_config()
    set_current_runtime_config(loaded)
    return loaded


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = _deep_merge(existing, value)
        else:
            out[key] = value
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {path}") from exc
    if not isinstance(payload, dict):
        raise RuntimeError(f"runtime config root must be a table: {path}")
    return payload


def _as_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"runtime config section [{key}] must be a table")
    return value


def _as_str(value: Any, *, default: str) -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def _as_int(value: Any, *, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default


def _as_float(value: Any, *, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _as_headers(value: Any) -> tuple[tuple[str, str], ...]:
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise RuntimeError("provider headers must be a table")
    return tuple((str(name), str(header)) for name, header in sorted(value.items()))


_PRIOR_FIELDS = (
    "tempo",
    "home_attack_rel",
    "away_attack_rel",
    "home_defense_rel",
    "away_defense_rel",
)


def _provider_config(entry: Any, *, index: int) -> ProviderConfig:
    if not isinstance(entry, dict):
        raise RuntimeError(f"runtime config [[providers]] entry {index} must be a table")
    source = _as_str(entry.get("source"), default="")
    if not source:
        raise RuntimeError(f"runtime config [[providers]] entry {index} is missing source")
    weight = _as_float(entry.get("weight"), default=0.0)
    if not math.isfinite(weight) or weight < 0:
        raise RuntimeError(f"provider weight must be finite and non-negative: {source}")
    config = ProviderConfig(
        source=source,
        credential=_as_str(entry.get("credential"), default=""),
        url=_as_str(entry.get("url"), default=""),
        auth_header=_as_str(entry.get("auth_header"), default=""),
        headers=_as_headers(entry.get("headers")),
        weight=weight,
        tempo=_as_float(entry.get("tempo"), default=2.55),
        home_attack_rel=_as_float(entry.get("home_attack_rel"), default=1.0),
        away_attack_rel=_as_float(entry.get("away_attack_rel"), default=1.0),
        home_defense_rel=_as_float(entry.get("home_defense_rel"), default=1.0),
        away_defense_rel=_as_float(entry.get("away_defense_rel"), default=1.0),
        note=_as_str(entry.get("note"), default=""),
    )
    for name in _PRIOR_FIELDS:
        if not math.isfinite(getattr(config, name)):
            raise RuntimeError(f"provider {name} must be finite: {source}")
    return config


def _providers(payload: dict[str, Any]) -> tuple[ProviderConfig, ...]:
    raw = payload.get("providers", [])
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise RuntimeError("runtime config [[providers]] must be an array of tables")
    providers = tuple(_provider_config(entry, index=idx) for idx, entry in enumerate(raw))
    names = [provider.source for provider in providers]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise RuntimeError(f"duplicate provider source: {','.join(duplicates)}")
    return providers


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load runtime config from `config/runtime.toml` plus optional local override."""
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not source.exists():
        raise RuntimeError(f"runtime config file not found: {source}")

    payload = _read_toml(source)
    if source == DEFAULT_CONFIG_PATH and DEFAULT_LOCAL_OVERRIDE_PATH.exists():
        payload = _deep_merge(payload, _read_toml(DEFAULT_LOCAL_OVERRIDE_PATH))

    card = _as_table(payload, "card")
    scanner = _as_table(payload, "scanner")
    defaults = ScannerConfig()

    anchor_weight = _as_float(card.get("anchor_weight"), default=0.40)
    if not math.isfinite(anchor_weight) or anchor_weight <= 0:
        raise RuntimeError(f"anchor_weight must be finite and positive: {anchor_weight}")
    provider_timeout_s = _as_float(card.get("provider_timeout_s"), default=6.0)
    if not math.isfinite(provider_timeout_s) or provider_timeout_s <= 0:
        raise RuntimeError(f"provider_timeout_s must be finite and positive: {provider_timeout_s}")

    return RuntimeConfig(
        config_path=source,
        anchor_weight=anchor_weight,
        provider_timeout_s=provider_timeout_s,
        provider_max_workers=max(1, _as_int(card.get("provider_max_workers"), default=4)),
        scanner=ScannerConfig(
            user_bias=_as_float(scanner.get("user_bias"), default=defaults.user_bias),
            user_weight=_as_float(scanner.get("user_weight"), default=defaults.user_weight),
            assist_weight=_as_float(scanner.get("assist_weight"), default=defaults.assist_weight),
            clamp_below=_as_float(scanner.get("clamp_below"), default=defaults.clamp_below),
            clamp_above=_as_float(scanner.get("clamp_above"), default=defaults.clamp_above),
            near_miss_limit=_as_int(
                scanner.get("near_miss_limit"), default=defaults.near_miss_limit
            ),
        ),
        providers=_providers(payload),
    )
