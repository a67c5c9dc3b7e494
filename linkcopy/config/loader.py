"""Configuration loading with fail-fast behavior and layered merging.

Layers, later overriding earlier:
1. Global user config (~/.linkcopy/config.json) OR shipped defaults (if no global)
2. Project local config (<cwd>/.linkcopy/config.json)

Defaults are only used as a fallback when no global config exists. Every
error names the file it came from.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from linkcopy.config.schema import Config
from linkcopy.core.constants import LINKCOPY_DIR_NAME, get_defaults_dir, get_linkcopy_dir
from linkcopy.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Path to shipped defaults in the install directory
DEFAULTS_DIR = get_defaults_dir()
DEFAULT_CONFIG = DEFAULTS_DIR / "config.json"


@dataclass(frozen=True)
class ConfigLayer:
    """One config file and the JSON object it holds."""

    path: Path
    data: dict[str, Any]


def read_layer(path: Path, *, required: bool = False) -> ConfigLayer | None:
    """Read one JSON config file.

    Editors on Windows may save with a BOM, so the file is decoded as
    utf-8-sig. An empty file is an empty layer.

    Args:
        path: Config file to read.
        required: Raise when the file is missing instead of returning None.

    Raises:
        ConfigError: If the file is required but missing, unreadable, not
            valid JSON, or not a JSON object.
    """
    if not path.is_file():
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return None

    try:
        content = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = json.loads(content) if content.strip() else {}
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must hold a JSON object, got {type(data).__name__}"
        )
    return ConfigLayer(path=path, data=data)


def merge_layers(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge config mappings left to right.

    Sections (nested objects) merge key by key; any other value, lists
    included, replaces what came before. The inputs are not modified.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(value, Mapping):
                base = current if isinstance(current, dict) else {}
                merged[key] = merge_layers(base, value)
            else:
                merged[key] = value
    return merged


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or merged config
            fails validation.
    """
    if path is not None:
        layer = read_layer(path, required=True)
        layers = [layer] if layer is not None else []
    else:
        layers = _discover_layers(cwd or Path.cwd())

    if layers:
        logger.info("Config loaded from: %s", [str(layer.path) for layer in layers])
    else:
        logger.debug("No config files found, using Pydantic defaults")

    try:
        return Config.model_validate(merge_layers(*(layer.data for layer in layers)))
    except ValidationError as e:
        culprit = _find_culprit(layers, e)
        if culprit is not None:
            raise ConfigError(f"Config validation failed for {culprit.path}: {e}") from e
        sources = ", ".join(str(layer.path) for layer in layers)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _discover_layers(cwd: Path) -> list[ConfigLayer]:
    layers: list[ConfigLayer] = []

    # Layer 1: global config OR defaults (mutually exclusive)
    global_config = get_linkcopy_dir() / "config.json"
    base = read_layer(global_config)
    if base is not None and base.data:
        logger.debug("Using global config: %s", global_config)
    else:
        logger.debug("No global config at: %s, using defaults", global_config)
        base = read_layer(DEFAULT_CONFIG)
    if base is not None and base.data:
        layers.append(base)

    # Layer 2: project local config (skipped when cwd is home)
    local_config = cwd / LINKCOPY_DIR_NAME / "config.json"
    if local_config.resolve() != global_config.resolve():
        local = read_layer(local_config)
        if local is not None and local.data:
            layers.append(local)

    return layers


def _find_culprit(layers: list[ConfigLayer], error: ValidationError) -> ConfigLayer | None:
    """Find the last layer that sets a field pydantic rejected.

    Cross-field errors carry no field location; they are pinned to a file
    only when a single file was loaded.
    """
    locations = [err["loc"] for err in error.errors() if err["loc"]]
    if not locations:
        return layers[0] if len(layers) == 1 else None
    for layer in reversed(layers):
        if any(_sets(layer.data, loc) for loc in locations):
            return layer
    return None


def _sets(data: dict[str, Any], loc: tuple[int | str, ...]) -> bool:
    node: Any = data
    for key in loc:
        if not isinstance(node, dict) or key not in node:
            return False
        node = node[key]
    return True
