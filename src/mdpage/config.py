"""Pipeline configuration: settings schema, process-wide defaults, and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mdpage.core.utils.merge import clone, deep_merge


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPAGE_"


class Settings(BaseModel):
    """Effective configuration of one pipeline; immutable once built."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_path:         Union[str, list[str]] = Field(default=".", description="Template search root(s), first match wins")
    output_ext:        Optional[str] = Field(default=".html", description="Output extension; empty or None strips it")
    extra_data:        Union[dict[str, Any], str] = Field(default_factory=dict, description="Base context, inline or JSON path")
    use_block_default: bool = Field(default=True, description="Wrap layout pages in the named block")
    block_name:        str = Field(default="content", description="Layout block receiving the page body")
    layout_extension:  str = Field(default=".html", description="Appended to page.layout when extending")
    escape_markdown:   bool = Field(default=False, description="Emit Markdown text nodes unescaped")
    inherit_extension: bool = Field(default=False, description="Keep the source file extension")
    engine_options:    dict[str, Any] = Field(default_factory=lambda: {"auto_reload": False})
    environment_hook:  Optional[Callable[[Any], Any]] = None
    loader:            Optional[Any] = None     # jinja2 loader overriding base_path

    @field_validator("base_path", "extra_data", mode="before")
    @classmethod
    def _paths_to_str(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        if isinstance(value, (list, tuple)):
            return [os.fspath(v) if isinstance(v, os.PathLike) else v for v in value]
        return value


# Scalar fields that may be set through MDPAGE_<FIELD> environment variables.
ENV_FIELDS = (
    "base_path", "output_ext", "extra_data", "use_block_default", "block_name",
    "layout_extension", "escape_markdown", "inherit_extension",
)

_BUILTIN_DEFAULTS: dict[str, Any] = Settings().model_dump()
_defaults: dict[str, Any] = clone(_BUILTIN_DEFAULTS)


def get_defaults() -> dict[str, Any]:
    """Return a copy of the current process-wide default options."""
    return clone(_defaults)


def set_defaults(options: Optional[dict[str, Any]] = None) -> None:
    """Deep-merge options into the process-wide defaults.

    Only settings resolved after the call see the change; pipelines that
    already exist keep the settings they were built with.
    """
    global _defaults
    _defaults = deep_merge(_defaults, options or {})


def reset_defaults() -> None:
    """Restore the built-in defaults."""
    global _defaults
    _defaults = clone(_BUILTIN_DEFAULTS)


def resolve_config(options: Optional[dict[str, Any]] = None) -> Settings:
    """Merge options over the current defaults and validate into Settings."""
    if isinstance(options, Settings):
        return options
    return Settings(**deep_merge(_defaults, options or {}))


def load_config(overrides: Optional[dict[str, Any]] = None) -> Settings:
    """Load Settings from config.yaml, then MDPAGE_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in ENV_FIELDS:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data = deep_merge(data, {k: v for k, v in overrides.items() if v is not None})
    return resolve_config(data)
