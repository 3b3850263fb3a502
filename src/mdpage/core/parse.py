"""Front-matter extraction and Markdown preprocessing of source files"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from mdpage.config import Settings
from mdpage.core.markdown import render_markdown
from mdpage.core.models import FrontMatter, SourceFile
from mdpage.errors import FrontMatterError


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^(?:\ufeff)?---[ \t]*\r?\n(.*?)\r?\n?^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md', '.markdown'}


def is_markdown(path: Path) -> bool:
    """True when the file extension marks it as Markdown."""
    return Path(path).suffix.lower() in MD_EXTENSIONS


def parse_frontmatter(text: str) -> FrontMatter:
    """Split a leading YAML block off text; no block yields empty attributes."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return FrontMatter(attributes={}, body=text)
    try:
        attrs: Any = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front-matter: {e}") from e
    if not isinstance(attrs, dict):
        raise FrontMatterError(f"Invalid YAML front-matter: expected a mapping, got {type(attrs).__name__}")
    return FrontMatter(attributes=attrs, body=text[m.end():])


def preprocess(source: SourceFile, settings: Settings) -> FrontMatter:
    """Parse front-matter, then convert the stripped body when the file is Markdown."""
    fm = parse_frontmatter(source.text())
    if is_markdown(source.path):
        logger.debug("Converting Markdown body of %s", source.path)
        fm = FrontMatter(attributes=fm.attributes, body=render_markdown(fm.body, settings.escape_markdown))
    return fm
