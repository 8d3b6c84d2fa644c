"""Configuration loading.

Configuration is resolved in three steps:

1. Bundled defaults (``layertools/data/config/defaults.yaml``)
2. ``LAYERTOOLS_<section>__<key>`` environment overrides
3. Validation against ``layertools/data/schemas/config.yaml`` (JSON Schema)

Command-line flags are applied by the CLI on top of the returned config.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import jsonschema

from layertools.data import read_yaml

from .exceptions import ConfigError

ENV_PREFIX = "LAYERTOOLS_"


@dataclass(frozen=True)
class LayertoolsConfig:
    """Resolved configuration for one invocation."""

    manifest_path: str
    layers_index_property: str
    classpath_index_property: str
    destination: Path
    log_level: str
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayertoolsConfig":
        manifest = data["manifest"]
        log_file = data["logging"].get("file")
        return cls(
            manifest_path=manifest["path"],
            layers_index_property=manifest["layers_index_property"],
            classpath_index_property=manifest["classpath_index_property"],
            destination=Path(data["extract"]["destination"]),
            log_level=data["logging"]["level"],
            log_file=Path(log_file) if log_file else None,
        )

    def manifest_properties(self) -> Dict[str, str]:
        """Keyword arguments for :class:`~layertools.core.manifest.JarManifest` parsing."""
        return {
            "layers_property": self.layers_index_property,
            "classpath_property": self.classpath_index_property,
        }


def _coerce(value: str) -> Any:
    # Every setting is a string; only an explicit null clears an optional one.
    if value.strip().lower() in {"null", "none", "~", ""}:
        return None
    return value.strip()


def _iter_env_overrides(environ: Mapping[str, str]):
    for key in sorted(environ.keys()):
        if not key.startswith(ENV_PREFIX):
            continue
        raw = key[len(ENV_PREFIX) :]
        segs = [s.lower() for s in raw.split("__")]
        if len(segs) < 2 or any(not s for s in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: '{key}' (expected {ENV_PREFIX}<section>__<key>)",
                context={"key": key},
            )
        yield segs, _coerce(environ[key])


def _set_nested(root: Dict[str, Any], path: List[str], value: Any) -> None:
    cur = root
    for part in path[:-1]:
        nxt = cur.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            cur[part] = nxt
        cur = nxt
    cur[path[-1]] = value


def validate_config(data: Mapping[str, Any]) -> None:
    """Validate merged configuration against the bundled schema."""
    schema = read_yaml("schemas", "config.yaml")
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        where = ".".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigError(
            f"Invalid configuration at {where}: {exc.message}",
            context={"path": where},
        ) from exc


def load_config_dict(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return the merged, validated configuration as a plain dict."""
    env = os.environ if environ is None else environ
    data: Dict[str, Any] = copy.deepcopy(read_yaml("config", "defaults.yaml"))

    for path, value in _iter_env_overrides(env):
        _set_nested(data, path, value)

    level = data.get("logging", {}).get("level")
    if isinstance(level, str):
        data["logging"]["level"] = level.upper()

    validate_config(data)
    return data


def load_config(environ: Optional[Mapping[str, str]] = None) -> LayertoolsConfig:
    return LayertoolsConfig.from_dict(load_config_dict(environ))


__all__ = [
    "ENV_PREFIX",
    "LayertoolsConfig",
    "load_config",
    "load_config_dict",
    "validate_config",
]
