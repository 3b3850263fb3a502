"""Output finalization: encode rendered HTML and rewrite the file extension"""

from pathlib import Path
from typing import Optional

from mdpage.config import Settings
from mdpage.core.models import RenderedFile, SourceFile


def replace_extension(path: Path, ext: Optional[str]) -> Path:
    """Swap the suffix of path for ext; an empty ext strips it."""
    path = Path(path)
    if not ext:
        return path.with_suffix("")
    if not ext.startswith("."):
        ext = "." + ext
    return path.with_suffix(ext)


def finalize(source: SourceFile, rendered: str, settings: Settings) -> RenderedFile:
    """Build the output file for source from its rendered text."""
    path = source.path if settings.inherit_extension else replace_extension(source.path, settings.output_ext)
    return RenderedFile(path=path, contents=rendered.encode("utf-8"), data=source.data)
