"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Iterator, Optional

import typer
from pydantic import ValidationError

from mdpage.config import Settings, load_config
from mdpage.core.models import RenderedFile, SourceFile
from mdpage.core.pipeline import Pipeline
from mdpage.errors import RenderError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except (ValueError, ValidationError) as e:
        _fail("Invalid configuration", e)


def _iter_sources(paths: list[Path]) -> Iterator[tuple[Path, SourceFile]]:
    """Yield (root, file) pairs; directories are walked, root keeps output paths relative."""
    for p in paths:
        if p.is_dir():
            for f in sorted(x for x in p.rglob('*') if x.is_file()):
                yield p, SourceFile.from_path(f)
        else:
            yield p.parent, SourceFile.from_path(p)


def render_cmd(
    sources: Annotated[list[Path], typer.Argument(exists=True, readable=True, help="Files or directories to render")],
    out: Annotated[Path, typer.Option("--out-dir", "-o", help="Output directory")] = Path("dist"),
    base_path: Annotated[Optional[list[str]], typer.Option("--base-path", help="Template search root; repeatable")] = None,
    data: Annotated[Optional[str], typer.Option("--data", help="JSON file with base context data")] = None,
    ext: Annotated[Optional[str], typer.Option("--ext", help="Output file extension")] = None,
    inherit: Annotated[bool, typer.Option("--inherit-extension", help="Keep source file extensions")] = False,
    no_block: Annotated[bool, typer.Option("--no-block", help="Do not wrap layout pages in the content block")] = False,
    escape_md: Annotated[bool, typer.Option("--escape-markdown", help="Leave Markdown text nodes unescaped")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log per-file decisions")] = False,
    ):
    """Render templates and Markdown pages to HTML."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = _settings(overrides={
        "base_path": base_path or None, "extra_data": data, "output_ext": ext,
        "inherit_extension": True if inherit else None,
        "use_block_default": False if no_block else None,
        "escape_markdown": True if escape_md else None,
    })
    pipeline = Pipeline(settings)

    failed: list[RenderError] = []
    written = 0
    for root, source in _iter_sources(sources):
        result = list(pipeline.run([source], on_error=failed.append))
        if not result or not isinstance(result[0], RenderedFile):
            continue
        target = out / result[0].path.relative_to(root)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(result[0].contents)
        typer.echo(f"  {source.path} -> {target}")
        written += 1

    typer.echo(f"Rendered {written} file(s) to {out}/, {len(failed)} failed")
    if failed:
        raise typer.Exit(1)
