from __future__ import annotations

import ast
import enum
import json
import tomllib
from dataclasses import asdict, fields, is_dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, TypeVar, get_type_hints

TConfig = TypeVar("TConfig", bound="ConfigBase")


class ConfigBase:
    """Mixin for nested dataclass configs read from .toml/.json and patched with dotted keys."""

    @classmethod
    def from_file(cls: type[TConfig], config_path: str | Path) -> TConfig:
        return cls.from_dict(load_config_file(config_path))

    @classmethod
    def from_dict(cls: type[TConfig], data: Mapping[str, Any]) -> TConfig:
        hints = get_type_hints(cls)
        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")
        kwargs = {name: _coerce(hints[name], value, path=name) for name, value in data.items()}
        return cls(**kwargs)  # type: ignore[call-arg]

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))  # type: ignore[call-overload]

    def updated(self: TConfig, updates: Mapping[str, Any]) -> TConfig:
        """Copy with dotted keys replaced, e.g. ``{"keys.low": -5, "direction": "max"}``."""
        data = self.to_dict()
        for dotted_key, value in updates.items():
            _set_dotted(data, dotted_key, value)
        return type(self).from_dict(data)

    def with_overrides(self: TConfig, expressions: Iterable[str]) -> TConfig:
        """Apply ``KEY=VALUE`` strings as given to ``--set``."""
        updates: dict[str, Any] = {}
        for expression in expressions:
            key, sep, raw = expression.partition("=")
            if not sep:
                raise ValueError(
                    f"Invalid --set expression: `{expression}` (expected KEY=VALUE)"
                )
            updates[key.strip()] = parse_value(raw)
        return self.updated(updates) if updates else self


def _coerce(field_type: Any, incoming: Any, *, path: str) -> Any:
    if not isinstance(field_type, type):
        return incoming
    if is_dataclass(field_type) and issubclass(field_type, ConfigBase):
        if not isinstance(incoming, Mapping):
            raise ValueError(f"Expected mapping for nested config field `{path}`.")
        return field_type.from_dict(incoming)
    if issubclass(field_type, enum.Enum) and not isinstance(incoming, field_type):
        try:
            return field_type(incoming)
        except ValueError:
            choices = [member.value for member in field_type]
            raise ValueError(f"Invalid value `{incoming}` for `{path}`. Choices: {choices}") from None
    return incoming


def _set_dotted(data: dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = dotted_key.split(".")
    if any(not part for part in parts):
        raise ValueError(f"Invalid override key `{dotted_key}`.")
    cursor = data
    for depth, part in enumerate(parts):
        seen = ".".join(parts[: depth + 1])
        if part not in cursor:
            raise ValueError(f"Unknown config field `{seen}`.")
        if depth == len(parts) - 1:
            break
        if not isinstance(cursor[part], dict):
            raise ValueError(f"Cannot set `{dotted_key}`: `{seen}` is not a section.")
        cursor = cursor[part]
    if isinstance(cursor[parts[-1]], dict):
        raise ValueError(f"`{dotted_key}` is a section; set one of its fields instead.")
    cursor[parts[-1]] = value


def load_config_file(config_path: str | Path) -> dict[str, Any]:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix == ".toml":
        data = tomllib.loads(path.read_text())
    elif path.suffix == ".json":
        data = json.loads(path.read_text())
    else:
        raise ValueError(f"Unsupported config format: {path.suffix}. Use .toml or .json.")
    if not isinstance(data, Mapping):
        raise ValueError("Config must parse to a mapping at the top level.")
    return dict(data)


def parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    try:
        return ast.literal_eval(raw)
    except (ValueError, SyntaxError):
        return raw


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, enum.Enum):
        return value.value
    return value
