"""Monitor configuration from a JSON file and ``TELEMETRY_*`` variables.

Lookup order for the file: ``$TELEMETRY_CONFIG``, the explicit path, then
``telemetry.json`` in the working directory. A missing file is not an
error; every key has a default. Environment variables override file keys.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from telemetry.lidar import Surface
from telemetry.nmea.gga import DEFAULT_TALKER_IDS

__all__ = ["MonitorConfig", "load_config"]

DEFAULT_CONFIG_FILE = "telemetry.json"
_ENV_PREFIX = "TELEMETRY_"


@dataclass(frozen=True)
class MonitorConfig:
    update_interval_seconds: float = 2.0
    width_px: float = 300
    height_px: float = 300
    meters_per_pixel: float = 0.02
    max_display_range_m: float = 100.0
    talker_ids: tuple[str, ...] = DEFAULT_TALKER_IDS
    nmea_log: Path | None = None
    scan_log: Path | None = None
    replay_loop: bool = True

    @property
    def replay_enabled(self) -> bool:
        return self.nmea_log is not None and self.scan_log is not None

    def surface(self) -> Surface:
        return Surface(
            width_px=self.width_px,
            height_px=self.height_px,
            meters_per_pixel=self.meters_per_pixel,
            max_display_range_m=self.max_display_range_m,
        )


def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    raw = json.loads(path.read_text("utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: configuration must be a JSON object")
    return raw


def _as_float(value: Any, default: float, name: str) -> float:
    if value is None:
        return default
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if result <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return result


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    text = str(value).strip()
    return Path(text) if text else None


def _as_talker_ids(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_TALKER_IDS
    if isinstance(value, str):
        value = value.split(",")
    talker_ids = tuple(str(item).strip().upper() for item in value if str(item).strip())
    if not talker_ids:
        raise ValueError("talker_ids must name at least one talker")
    return talker_ids


def _resolve_path(env: Mapping[str, str], config_path: Path | None) -> Path:
    if f"{_ENV_PREFIX}CONFIG" in env:
        return Path(env[f"{_ENV_PREFIX}CONFIG"])
    if config_path is not None:
        return config_path
    return Path(DEFAULT_CONFIG_FILE)


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> MonitorConfig:
    """Build a ``MonitorConfig`` from file and environment.

    Args:
        config_path: JSON file to read when ``$TELEMETRY_CONFIG`` is unset.
        env: Environment mapping, ``os.environ`` by default.

    Raises:
        ValueError: If the file is not a JSON object or a value is invalid.
    """
    env = os.environ if env is None else env
    raw = _load_json(_resolve_path(env, config_path))

    def pick(key: str) -> Any:
        return env.get(_ENV_PREFIX + key.upper(), raw.get(key))

    return MonitorConfig(
        update_interval_seconds=_as_float(
            pick("update_interval_seconds"), 2.0, "update_interval_seconds"
        ),
        width_px=_as_float(pick("width_px"), 300, "width_px"),
        height_px=_as_float(pick("height_px"), 300, "height_px"),
        meters_per_pixel=_as_float(pick("meters_per_pixel"), 0.02, "meters_per_pixel"),
        max_display_range_m=_as_float(
            pick("max_display_range_m"), 100.0, "max_display_range_m"
        ),
        talker_ids=_as_talker_ids(pick("talker_ids")),
        nmea_log=_as_optional_path(pick("nmea_log")),
        scan_log=_as_optional_path(pick("scan_log")),
        replay_loop=_as_bool(pick("replay_loop"), True),
    )
