"""Engine configuration: undo bound, field flavour and key binding strings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from field_engine.buffer.undo import DEFAULT_UNDO_CAPACITY

ENV_PREFIX = "FIELD_ENGINE_"


class ConfigError(ValueError):
    """Raised when a configuration value has the wrong type or range."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


@dataclass(frozen=True, slots=True)
class KeyBindingConfig:
    """Binding strings in the ``Ctrl+z`` / ``Ctrl+Left`` notation."""

    undo: str = "Ctrl+z"
    redo: str = "Ctrl+y"
    word_left: str = "Ctrl+Left"
    word_right: str = "Ctrl+Right"
    copy: str = "Ctrl+c"
    cut: str = "Ctrl+x"
    paste: str = "Ctrl+v"
    select_all: str = "Ctrl+a"

    def __post_init__(self) -> None:
        # Deferred: field_engine.keymaps imports this module for its defaults.
        from field_engine.keymaps.parsing import KeyBindingError, parse_key_binding

        for name, value in self.as_dict().items():
            try:
                parse_key_binding(value)
            except KeyBindingError as exc:
                raise ConfigError(
                    f"key binding '{name}' is invalid: {exc}", key=name
                ) from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "KeyBindingConfig":
        known = {f.name for f in fields(cls)}
        values: dict[str, str] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"key binding '{key}' must be a non-empty string", key=key
                )
            values[key] = value.strip()
        return cls(**values)

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    undo_capacity: int = DEFAULT_UNDO_CAPACITY
    multiline: bool = False
    key_bindings: KeyBindingConfig = field(default_factory=KeyBindingConfig)

    def __post_init__(self) -> None:
        if isinstance(self.undo_capacity, bool) or not isinstance(
            self.undo_capacity, int
        ):
            raise ConfigError("undo_capacity must be an integer", key="undo_capacity")
        if self.undo_capacity < 1:
            raise ConfigError("undo_capacity must be at least 1", key="undo_capacity")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a plain mapping (e.g. a parsed TOML table).

        Unknown keys are ignored so newer config files load on older engines.
        """

        config = cls()
        if "undo_capacity" in data:
            config = replace(config, undo_capacity=data["undo_capacity"])
        if "multiline" in data:
            multiline = data["multiline"]
            if not isinstance(multiline, bool):
                raise ConfigError("multiline must be a boolean", key="multiline")
            config = replace(config, multiline=multiline)
        bindings = data.get("key_bindings")
        if bindings is not None:
            if not isinstance(bindings, Mapping):
                raise ConfigError("key_bindings must be a table", key="key_bindings")
            config = replace(config, key_bindings=KeyBindingConfig.from_mapping(bindings))
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        raw_capacity = env.get(f"{ENV_PREFIX}UNDO_CAPACITY")
        if raw_capacity is not None:
            try:
                data["undo_capacity"] = int(raw_capacity)
            except ValueError as exc:
                raise ConfigError(
                    f"{ENV_PREFIX}UNDO_CAPACITY must be an integer, got {raw_capacity!r}",
                    key="undo_capacity",
                ) from exc
        raw_multiline = env.get(f"{ENV_PREFIX}MULTILINE")
        if raw_multiline is not None:
            data["multiline"] = raw_multiline.strip().lower() in {"1", "true", "yes", "on"}
        return cls.from_mapping(data)


__all__ = [
    "ConfigError",
    "DEFAULT_UNDO_CAPACITY",
    "EngineConfig",
    "KeyBindingConfig",
]
