# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration for the clifs filesystem layer.

Settings resolve in three layers, later layers winning:

1. Defaults on :class:`IOConfig`.
2. A TOML or YAML file (``~/.config/clifs/config.toml`` when no path is given).
3. ``CLIFS_*`` environment variables.

Example::

    config = load_config(Path("clifs.yaml"), env={"CLIFS_SANDBOXED": "1"})
    assert config.sandboxed
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, cast

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path("~/.config/clifs/config.toml")

#: Largest single write issued for binary output.
DEFAULT_CHUNK_SIZE: Final[int] = 10_000_000
STDIN_PATH: Final[str] = "/dev/stdin"
STDOUT_PATH: Final[str] = "/dev/stdout"

ENV_CHUNK_SIZE = "CLIFS_CHUNK_SIZE"
ENV_SANDBOXED = "CLIFS_SANDBOXED"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_CONFIG_PATH",
    "STDIN_PATH",
    "STDOUT_PATH",
    "IOConfig",
    "load_config",
]


@dataclass(frozen=True, slots=True)
class IOConfig:
    """Resolved settings for filesystem access.

    Attributes:
        chunk_size: Maximum bytes handed to a single write call.
        sandboxed: True when no real filesystem is available. Probes then
            report every path as absent and output directories are not
            validated.
        stdin_path: Sentinel path that reads from standard input.
        stdout_path: Sentinel path that writes to standard output.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    sandboxed: bool = False
    stdin_path: str = STDIN_PATH
    stdout_path: str = STDOUT_PATH

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive (got {self.chunk_size})."
            raise ConfigError(msg)


def load_config(
    path: Path | Mapping[str, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> IOConfig:
    """Load configuration from a file or mapping and apply env overrides.

    Parameters
    ----------
    path:
        TOML or YAML file. ``None`` falls back to
        ``~/.config/clifs/config.toml`` and tolerates its absence. Tests may
        pass an in-memory mapping to skip filesystem I/O.
    env:
        Optional environment mapping. Defaults to :data:`os.environ`.
    """

    env_map = os.environ if env is None else env

    if isinstance(path, Mapping):
        raw: dict[str, object] = dict(path)
    else:
        config_path = path if path is not None else DEFAULT_CONFIG_PATH.expanduser()
        raw = _load_config_file(config_path, required=path is not None)

    values: dict[str, Any] = {
        "chunk_size": _coerce_int(raw.get("chunk_size"), "chunk_size"),
        "sandboxed": _coerce_bool(raw.get("sandboxed"), "sandboxed"),
        "stdin_path": _coerce_str(raw.get("stdin_path"), "stdin_path"),
        "stdout_path": _coerce_str(raw.get("stdout_path"), "stdout_path"),
    }

    if (chunk_env := env_map.get(ENV_CHUNK_SIZE)) is not None:
        values["chunk_size"] = _coerce_int(chunk_env, ENV_CHUNK_SIZE)
    if (sandbox_env := env_map.get(ENV_SANDBOXED)) is not None:
        values["sandboxed"] = _coerce_bool(sandbox_env, ENV_SANDBOXED)

    return IOConfig(**{k: v for k, v in values.items() if v is not None})


def _load_config_file(path: Path, *, required: bool) -> dict[str, object]:
    if not path.exists():
        if not required:
            return {}
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    suffix = path.suffix.lower()
    data: object
    if suffix == ".toml" or not suffix:
        with path.open("rb") as handle:
            try:
                data = tomllib.load(handle)
            except tomllib.TOMLDecodeError as err:
                raise ConfigError(f"Invalid TOML in {path}: {err}") from err
    elif suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as err:
                raise ConfigError(f"Invalid YAML in {path}: {err}") from err
    else:
        msg = f"Unsupported configuration format: {path.suffix}"
        raise ConfigError(msg)

    if not isinstance(data, MutableMapping):
        msg = "Configuration file must contain a mapping at the root."
        raise ConfigError(msg)

    mapping = cast(MutableMapping[object, object], data)
    typed: dict[str, object] = {}
    for key, value in mapping.items():
        if not isinstance(key, str):
            msg = f"Configuration keys must be strings (got {key!r})."
            raise ConfigError(msg)
        typed[key] = value
    return typed


def _coerce_int(value: object, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer (got {value!r}).")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip().replace("_", ""))
        except ValueError:
            pass
    raise ConfigError(f"{name} must be an integer (got {value!r}).")


def _coerce_bool(value: object, name: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"{name} must be a boolean (got {value!r}).")


def _coerce_str(value: object, name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str) and value:
        return value
    raise ConfigError(f"{name} must be a non-empty string (got {value!r}).")
