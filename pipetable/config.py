"""Formatter configuration model and loaders.

Responsibilities:
- Define the three formatter switches as an immutable dataclass.
- Provide deterministic precedence resolution for CLI, environment, and file values.
- Provide loader entry points for mapping-, file-, and environment-based options.

Key types:
- `FormatOptions`: immutable switches selecting the optional formatter stages.
- `OptionSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `FormatOptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off"})

ENV_KEYS: dict[str, str] = {
    "consistent_cells_width": "PIPETABLE_CONSISTENT_CELLS_WIDTH",
    "add_padding": "PIPETABLE_ADD_PADDING",
    "remove_header": "PIPETABLE_REMOVE_HEADER",
}

_KEY_ALIASES: dict[str, str] = {
    "consistentCellsWidth": "consistent_cells_width",
    "addPadding": "add_padding",
    "removeHeader": "remove_header",
}


@dataclass(frozen=True, slots=True)
class OptionSources:
    """Source mappings used for deterministic option precedence.

    Attributes:
        cli: Values explicitly provided by CLI flags; `None` means unset.
        env: Values loaded from environment variables.
    """

    cli: Mapping[str, bool | None] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Switches selecting which optional formatter stages run.

    Attributes:
        consistent_cells_width: Pad every cell to its column's widest content.
        add_padding: Surround cell content with one space on each side.
        remove_header: Drop the header and separator rows when present.
    """

    consistent_cells_width: bool = True
    add_padding: bool = True
    remove_header: bool = False

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return option names in declaration order."""

        return tuple(option.name for option in fields(cls))

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], source_label: str = "options"
    ) -> FormatOptions:
        """Merge a partial mapping over the defaults.

        Keys may use `snake_case` names or their `camelCase` aliases. `None`
        values keep the default.

        Raises:
            ValueError: If a key is unknown or a value is not a boolean token.
        """

        supported = set(cls.field_names())
        overrides: dict[str, bool] = {}
        unknown: list[str] = []
        for raw_key, raw_value in payload.items():
            key = _KEY_ALIASES.get(str(raw_key), str(raw_key))
            if key not in supported:
                unknown.append(str(raw_key))
                continue
            if raw_value is None:
                continue
            overrides[key] = parse_option_boolean(raw_value, f"{source_label} field `{key}`")

        if unknown:
            key_list = ", ".join(sorted(unknown))
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")
        return replace(cls(), **overrides)

    def resolved(self, sources: OptionSources | None = None) -> FormatOptions:
        """Resolve each switch with deterministic source precedence.

        Precedence for each key is:
        `cli` > `env` > current field value.
        """

        resolved_sources = sources if sources is not None else OptionSources()
        values: dict[str, bool] = {}
        for name in self.field_names():
            cli_value = resolved_sources.cli.get(name)
            if cli_value is not None:
                values[name] = bool(cli_value)
                continue
            env_value = _normalized_lookup(resolved_sources.env, ENV_KEYS[name])
            if env_value is not None:
                values[name] = parse_option_boolean(
                    env_value, f"Environment variable `{ENV_KEYS[name]}`"
                )
                continue
            values[name] = getattr(self, name)
        return FormatOptions(**values)

    def as_dict(self) -> dict[str, bool]:
        """Return option values keyed by option name."""

        return {name: getattr(self, name) for name in self.field_names()}


class ConfigLoader:
    """Factory methods for creating `FormatOptions` from external sources."""

    @staticmethod
    def from_yaml(path: Path) -> FormatOptions:
        """Create options from a YAML file holding any subset of the switches."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)
        return FormatOptions.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> FormatOptions:
        """Create options from `PIPETABLE_*` environment variables over defaults."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return FormatOptions().resolved(OptionSources(env=env_map))

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload


def resolve_format_options(
    cli: Mapping[str, bool | None] | None = None,
    env: Mapping[str, str] | None = None,
    base: FormatOptions | None = None,
) -> FormatOptions:
    """Resolve options as CLI > environment > base (config file) > defaults."""

    resolved_base = base if base is not None else FormatOptions()
    return resolved_base.resolved(
        OptionSources(
            cli=cli if cli is not None else {},
            env=os.environ if env is None else env,
        )
    )


def parse_option_boolean(value: object, subject: str) -> bool:
    """Parse one switch value from a permissive boolean token.

    Accepts real booleans and the case-insensitive tokens `true/false`, `1/0`,
    `yes/no`, `on/off`, ignoring surrounding whitespace.

    Args:
        value: Raw value from a YAML payload, environment variable, or mapping.
        subject: Phrase naming where the value came from, such as
            ``"YAML `x.yaml` field `add_padding`"`` or
            ``"Environment variable `PIPETABLE_ADD_PADDING`"``.

    Raises:
        ValueError: If the value is blank or not an accepted token.
    """

    if isinstance(value, bool):
        return value

    token = "" if value is None else str(value).strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(
        f"{subject} must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
    )


def _normalized_lookup(mapping: Mapping[str, str], key: str) -> str | None:
    """Return a stripped mapping value for a key or `None` when missing/blank."""

    value = mapping.get(key)
    if value is None:
        return None
    return str(value).strip() or None
