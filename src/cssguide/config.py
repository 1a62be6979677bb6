"""Run configuration for checks and the formatter.

Every rule the style guide states as a preference ("preference is for tabs",
"prefer double quotes") is an option here with an explicit default. The
configuration is validated when it is constructed and is read-only for the
duration of a run, so it can be shared by concurrent document pipelines.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from cssguide.errors import ConfigError

__all__ = [
    "DEFAULT_ZERO_UNIT_PROPERTIES",
    "StyleConfig",
    "load_config",
]

_SIDES = ("top", "right", "bottom", "left")

DEFAULT_ZERO_UNIT_PROPERTIES = frozenset(
    {
        "margin",
        "padding",
        "top",
        "right",
        "bottom",
        "left",
        "inset",
        "width",
        "height",
        "min-width",
        "min-height",
        "max-width",
        "max-height",
        "border",
        "border-width",
        "border-radius",
        "border-spacing",
        "outline",
        "outline-width",
        "outline-offset",
        "gap",
        "row-gap",
        "column-gap",
        "letter-spacing",
        "word-spacing",
        "text-indent",
        "font-size",
        "background-position",
        "box-shadow",
        "text-shadow",
    }
    | {f"margin-{side}" for side in _SIDES}
    | {f"padding-{side}" for side in _SIDES}
    | {f"border-{side}" for side in _SIDES}
    | {f"border-{side}-width" for side in _SIDES}
)

INDENT_CHARS = ("tab", "space")
QUOTES = ('"', "'")
MODES = ("report", "fix")


def _require_int(name: str, value: object, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{name}' must be an integer, got {value!r}", option=name)
    if value < minimum:
        raise ConfigError(f"'{name}' must be >= {minimum}, got {value}", option=name)


def _string_set(name: str, value: object) -> frozenset[str]:
    if not isinstance(value, (list, tuple, set, frozenset)) or not all(
        isinstance(v, str) for v in value
    ):
        raise ConfigError(f"'{name}' must be a collection of strings", option=name)
    return frozenset(value)


@dataclass(frozen=True)
class StyleConfig:
    """Options recognised by checks and the formatter.

    Attributes:
        indent_char: Preferred indentation character, ``tab`` or ``space``.
        indent_width: Spaces per indentation level when ``indent_char`` is ``space``.
        quote: Preferred quote character for strings and attribute values.
        blank_lines_between_rulesets: Exact blank lines between top-level rulesets.
        zero_unit_properties: Properties whose zero values must be unitless.
        max_nesting_depth: Deepest allowed nested ruleset (preprocessor mode).
        preprocessor: Enable nested-syntax checks and ``//`` comments.
        naming_allowlist: Class names, IDs and type tags exempt from naming checks.
        min_class_name_length: Class names shorter than this count as abbreviations.
        checks: Check identifier -> enabled flag, overriding each check's default.
        mode: ``report`` to only diagnose, ``fix`` to rewrite documents.
    """

    indent_char: str = "tab"
    indent_width: int = 4
    quote: str = '"'
    blank_lines_between_rulesets: int = 1
    zero_unit_properties: frozenset[str] = DEFAULT_ZERO_UNIT_PROPERTIES
    max_nesting_depth: int = 1
    preprocessor: bool = False
    naming_allowlist: frozenset[str] = frozenset()
    min_class_name_length: int = 3
    checks: Mapping[str, bool] = field(default_factory=dict)
    mode: str = "report"

    def __post_init__(self) -> None:
        from cssguide.checks import REGISTRY

        if self.indent_char not in INDENT_CHARS:
            raise ConfigError(
                f"'indent_char' must be one of {', '.join(INDENT_CHARS)}, got {self.indent_char!r}",
                option="indent_char",
            )
        _require_int("indent_width", self.indent_width, 1)
        if self.quote not in QUOTES:
            raise ConfigError(
                f"'quote' must be {QUOTES[0]!r} or {QUOTES[1]!r}, got {self.quote!r}",
                option="quote",
            )
        _require_int("blank_lines_between_rulesets", self.blank_lines_between_rulesets, 0)
        _require_int("max_nesting_depth", self.max_nesting_depth, 0)
        _require_int("min_class_name_length", self.min_class_name_length, 1)
        if not isinstance(self.preprocessor, bool):
            raise ConfigError("'preprocessor' must be a boolean", option="preprocessor")
        if self.mode not in MODES:
            raise ConfigError(
                f"'mode' must be one of {', '.join(MODES)}, got {self.mode!r}", option="mode"
            )

        zero_props = _string_set("zero_unit_properties", self.zero_unit_properties)
        allowlist = _string_set("naming_allowlist", self.naming_allowlist)
        object.__setattr__(self, "zero_unit_properties", frozenset(p.lower() for p in zero_props))
        object.__setattr__(self, "naming_allowlist", frozenset(a.lstrip(".#") for a in allowlist))

        if not isinstance(self.checks, Mapping):
            raise ConfigError("'checks' must be a mapping of check id to boolean", option="checks")
        for check_id, enabled in self.checks.items():
            if check_id not in REGISTRY:
                raise ConfigError(
                    f"Unknown check identifier {check_id!r}. "
                    f"Known checks: {', '.join(sorted(REGISTRY))}.",
                    option="checks",
                )
            if not isinstance(enabled, bool):
                raise ConfigError(
                    f"Check {check_id!r} must be enabled with a boolean, got {enabled!r}",
                    option="checks",
                )
        object.__setattr__(self, "checks", dict(self.checks))

    @property
    def indent_unit(self) -> str:
        return "\t" if self.indent_char == "tab" else " " * self.indent_width

    def is_enabled(self, check_id: str) -> bool:
        """Whether *check_id* runs under this configuration."""
        from cssguide.checks import REGISTRY

        spec = REGISTRY[check_id]
        if spec.preprocessor_only and not self.preprocessor:
            return False
        return self.checks.get(check_id, spec.enabled_by_default)

    def with_checks(self, **flags: bool) -> StyleConfig:
        """Return a copy with check flags merged in (``hex_case=False`` -> ``hex-case``)."""
        merged = dict(self.checks)
        merged.update({k.replace("_", "-"): v for k, v in flags.items()})
        return replace(self, checks=merged)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StyleConfig:
        """Build a config from a plain mapping, as read from a config file.

        Keys may use dashes or underscores. Unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = raw_key.replace("-", "_")
            if key not in known:
                raise ConfigError(f"Unknown configuration option {raw_key!r}", option=raw_key)
            if key in ("zero_unit_properties", "naming_allowlist"):
                if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
                    raise ConfigError(f"'{key}' must be a list of strings", option=key)
                value = frozenset(value)
            kwargs[key] = value
        return cls(**kwargs)


def load_config(path: Path | str) -> StyleConfig:
    """Load a StyleConfig from a ``.json`` or ``.toml`` file.

    TOML files may hold the options at top level or in a ``[tool.cssguide]``
    table (so ``pyproject.toml`` works).
    """
    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}", cause=exc) from exc

    try:
        if path.suffix == ".toml":
            data: Any = tomllib.loads(raw_text)
            data = data.get("tool", {}).get("cssguide", data)
        else:
            data = json.loads(raw_text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}", cause=exc) from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain an object of options")
    return StyleConfig.from_dict(data)
