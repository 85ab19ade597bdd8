"""Board configuration loading from env files, environment and markup attributes."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import fields
from pathlib import Path
from typing import Any

from dicetable.core.config import BoardConfig
from dicetable.core.errors import ConfigurationError

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})

logger = logging.getLogger(__name__)

# Environment variable -> BoardConfig field. Disabled flags are inverted.
_ENV_NUMBERS: dict[str, str] = {
    "DICETABLE_WIDTH": "width",
    "DICETABLE_HEIGHT": "height",
    "DICETABLE_DIE_SIZE": "die_size",
    "DICETABLE_DISPERSION": "dispersion",
    "DICETABLE_HOLD_DURATION": "hold_duration",
}
_ENV_DISABLED_FLAGS: dict[str, str] = {
    "DICETABLE_DRAGGING_DISABLED": "draggable",
    "DICETABLE_HOLDING_DISABLED": "holdable",
    "DICETABLE_ROTATING_DISABLED": "rotating",
}

_ATTRIBUTE_NUMBERS: dict[str, str] = {
    "width": "width",
    "height": "height",
    "die-size": "die_size",
    "dispersion": "dispersion",
    "hold-duration": "hold_duration",
}
_ATTRIBUTE_DISABLED_FLAGS: dict[str, str] = {
    "dragging-dice-disabled": "draggable",
    "holding-dice-disabled": "holdable",
    "rotating-dice-disabled": "rotating",
}


DEFAULT_ENV_FILES: tuple[str, ...] = (".env.dicetable", ".env.dicetable.local")


def read_env_file(path: str | Path) -> dict[str, str]:
    """Return the ``KEY=VALUE`` pairs of an env file; a missing file has none.

    Blank lines and ``#`` comments are skipped, an ``export`` prefix is
    allowed and one level of matching quotes around a value is removed.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}
    pairs: dict[str, str] = {}
    for number, raw_line in enumerate(env_path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line.removeprefix("export ").lstrip()
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key:
            logger.debug("env_line_skipped path=%s line=%d", env_path, number)
            continue
        pairs[key] = _unquote(value.strip())
    return pairs


def load_env_file(path: str | Path = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Copy an env file into ``os.environ`` and return the values applied."""
    return _apply_env(read_env_file(path), override_existing=override_existing)


def load_default_env_files(
    *,
    override_existing: bool = True,
    paths: Sequence[str] | None = None,
    base_dir: str | Path | None = None,
) -> dict[str, str]:
    """Load `DEFAULT_ENV_FILES` from `base_dir` (the working directory by default).

    Later files win over earlier ones. Without `override_existing`, variables
    set before loading keep their values.
    """
    root = Path.cwd() if base_dir is None else Path(base_dir)
    merged: dict[str, str] = {}
    for name in DEFAULT_ENV_FILES if paths is None else paths:
        merged.update(read_env_file(root / name))
    return _apply_env(merged, override_existing=override_existing)


def _apply_env(pairs: Mapping[str, str], *, override_existing: bool) -> dict[str, str]:
    applied = {key: value for key, value in pairs.items() if override_existing or key not in os.environ}
    os.environ.update(applied)
    if applied:
        logger.debug("env_loaded keys=%s", ",".join(sorted(applied)))
    return applied


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def load_board_config(*, env: Mapping[str, str] | None = None) -> BoardConfig:
    """Build a BoardConfig from DICETABLE_* variables; unset ones keep defaults."""
    source = os.environ if env is None else env
    values: dict[str, Any] = {}
    for name, field_name in _ENV_NUMBERS.items():
        raw = source.get(name)
        if raw is not None and raw.strip():
            values[field_name] = parse_number(name, raw)
    for name, field_name in _ENV_DISABLED_FLAGS.items():
        raw = source.get(name)
        if raw is not None and raw.strip():
            values[field_name] = not parse_flag(name, raw)
    return BoardConfig(**values)


def board_config_from_attributes(
    attributes: Mapping[str, str],
    *,
    base: BoardConfig | None = None,
) -> BoardConfig:
    """Build a BoardConfig from markup-style attributes such as ``die-size``.

    A disabling attribute counts as set when its value is empty, ``"true"`` or
    the attribute's own name, and as unset for ``"false"``.
    """
    values = {field.name: getattr(base or BoardConfig(), field.name) for field in fields(BoardConfig)}
    for name, raw in attributes.items():
        if name in _ATTRIBUTE_NUMBERS:
            values[_ATTRIBUTE_NUMBERS[name]] = parse_number(name, raw)
        elif name in _ATTRIBUTE_DISABLED_FLAGS:
            values[_ATTRIBUTE_DISABLED_FLAGS[name]] = not _parse_attribute_flag(name, raw)
        else:
            raise ConfigurationError(f"unknown board attribute: {name!r}")
    return BoardConfig(**values)


def parse_number(name: str, raw: str) -> float:
    text = str(raw).strip()
    try:
        value = float(text)
    except ValueError:
        raise ConfigurationError(f"{name} should be a number, got {raw!r} instead.") from None
    if value.is_integer():
        return int(value)
    return value


def parse_flag(name: str, raw: str) -> bool:
    value = str(raw).strip().lower()
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ConfigurationError(f"{name} should be a boolean, got {raw!r} instead.")


def _parse_attribute_flag(name: str, raw: str) -> bool:
    value = str(raw).strip().lower()
    if value in {"", "true", name}:
        return True
    if value == "false":
        return False
    raise ConfigurationError(f"{name} should be 'true', 'false' or {name!r}, got {raw!r} instead.")
