"""Per-file template data context: extra data, sidecar data, and front-matter"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from mdpage.config import Settings
from mdpage.core.models import FrontMatter, SourceFile
from mdpage.core.utils.merge import clone, deep_merge
from mdpage.errors import ConfigDataError


def load_extra_data(extra_data: Union[Mapping[str, Any], str]) -> dict[str, Any]:
    """Return a private copy of inline data, or the parsed JSON object at a path."""
    if isinstance(extra_data, Mapping):
        return clone(extra_data)
    path = Path(extra_data).resolve()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigDataError(f"Cannot read data file {path}: {e}") from e
    except ValueError as e:
        raise ConfigDataError(f"Invalid JSON in data file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigDataError(f"Data file {path} must hold a JSON object, got {type(data).__name__}")
    return data


def build_context(settings: Settings, source: SourceFile, fm: FrontMatter) -> dict[str, Any]:
    """Merge extra data < sidecar data < {"page": front-matter} into a fresh dict."""
    context = load_extra_data(settings.extra_data)
    if source.data:
        context = deep_merge(context, source.data)
    if fm.attributes:
        context = deep_merge(context, {"page": fm.attributes})
    return context
