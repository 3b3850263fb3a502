"""Layout inheritance: wrap a page body in an extends directive and content block"""

import logging
from collections.abc import Mapping
from typing import Any

from mdpage.config import Settings
from mdpage.errors import LayoutRequiredError


logger = logging.getLogger(__name__)

USE_BLOCK_KEYS = ("useBlock", "use_block")


def _page(context: Mapping[str, Any]) -> Mapping[str, Any]:
    page = context.get("page")
    return page if isinstance(page, Mapping) else {}


def has_layout(context: Mapping[str, Any]) -> bool:
    """True when page.layout is declared, whatever its value."""
    return "layout" in _page(context)


def use_block(context: Mapping[str, Any], settings: Settings) -> bool:
    """Per-page useBlock wins over the configured default."""
    page = _page(context)
    for key in USE_BLOCK_KEYS:
        if key in page:
            return bool(page[key])
    return settings.use_block_default


def wrap_layout(context: Mapping[str, Any], body: str, settings: Settings, has_front_matter: bool) -> str:
    """Prefix body with an extends directive for page.layout.

    With block wrapping the body becomes the named block; without it the
    body is emitted as-is and must declare its own block overrides.
    Front-matter without any layout in the context is rejected.
    """
    if not has_layout(context):
        if has_front_matter:
            raise LayoutRequiredError("Layout not declared in front-matter or data")
        return body

    layout = _page(context)["layout"]
    directive = '{% extends "' + f"{layout}{settings.layout_extension}" + '" %}'
    if use_block(context, settings):
        logger.debug("Wrapping body in block %r of layout %r", settings.block_name, layout)
        return f"{directive}{{% block {settings.block_name} %}}{body}{{% endblock %}}"
    logger.debug("Extending layout %r without block wrapping", layout)
    return directive + body
