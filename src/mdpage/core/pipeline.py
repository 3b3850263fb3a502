"""Per-file render pipeline: preprocess -> context -> layout -> render -> finalize"""

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from typing import Any, Optional, Union

from mdpage.config import Settings, resolve_config
from mdpage.core.context import build_context
from mdpage.core.layout import wrap_layout
from mdpage.core.models import RenderedFile, SourceFile
from mdpage.core.output import finalize
from mdpage.core.parse import preprocess
from mdpage.core.render import make_environment, render, render_async
from mdpage.errors import RenderError, StreamingUnsupportedError


logger = logging.getLogger(__name__)

ErrorHandler = Callable[[RenderError], Any]
Output = Union[RenderedFile, SourceFile]


class Pipeline:
    """Render source files through one Jinja2 environment.

    Settings are resolved and the environment (including the hook call)
    is built once, at construction. Every file then gets its own data
    context, so files may be processed in any order.
    """

    def __init__(self, options: Optional[Union[dict[str, Any], Settings]] = None):
        self.settings = resolve_config(options)
        self.env = make_environment(self.settings)

    def _prepare(self, source: SourceFile) -> tuple[str, dict[str, Any]]:
        """Return the template source and data context for one file."""
        if source.is_stream():
            raise StreamingUnsupportedError("Streaming not supported")
        try:
            fm = preprocess(source, self.settings)
        except UnicodeDecodeError as e:
            raise RenderError(f"Contents are not valid UTF-8: {e}") from e
        context = build_context(self.settings, source, fm)
        content = wrap_layout(context, fm.body, self.settings, bool(fm.attributes))
        return content, context

    def _finish(self, source: SourceFile, rendered: str) -> RenderedFile:
        out = finalize(source, rendered, self.settings)
        logger.debug("Rendered %s -> %s", source.path, out.path)
        return out

    def process(self, source: SourceFile) -> Output:
        """Transform one file; null-content files are returned untouched.

        Raises a RenderError subclass carrying the file name on failure.
        """
        if source.is_null():
            return source
        try:
            content, context = self._prepare(source)
            rendered = render(self.env, content, context)
        except RenderError as e:
            e.file_name = e.file_name or str(source.path)
            raise
        return self._finish(source, rendered)

    async def aprocess(self, source: SourceFile) -> Output:
        """Async twin of process, for async environments or async hosts."""
        if source.is_null():
            return source
        try:
            content, context = self._prepare(source)
            rendered = await render_async(self.env, content, context)
        except RenderError as e:
            e.file_name = e.file_name or str(source.path)
            raise
        return self._finish(source, rendered)

    @staticmethod
    def _report(err: RenderError, on_error: Optional[ErrorHandler]) -> None:
        logger.error("Failed to render %s: %s", err.file_name, err.message)
        if on_error is not None:
            on_error(err)

    def run(self, files: Iterable[SourceFile], on_error: Optional[ErrorHandler] = None) -> Iterator[Output]:
        """Yield one output per input; failed files are reported and dropped."""
        for source in files:
            try:
                out = self.process(source)
            except RenderError as e:
                self._report(e, on_error)
                continue
            yield out

    async def arun(
        self,
        files: Union[Iterable[SourceFile], AsyncIterable[SourceFile]],
        on_error: Optional[ErrorHandler] = None,
        ) -> AsyncIterator[Output]:
        """Async generator twin of run; accepts sync or async iterables."""
        async for source in _aiter(files):
            try:
                out = await self.aprocess(source)
            except RenderError as e:
                self._report(e, on_error)
                continue
            yield out


async def _aiter(files: Union[Iterable[SourceFile], AsyncIterable[SourceFile]]) -> AsyncIterator[SourceFile]:
    if isinstance(files, AsyncIterable):
        async for source in files:
            yield source
    else:
        for source in files:
            yield source


def render_pipeline(options: Optional[dict[str, Any]] = None) -> Pipeline:
    """Build a Pipeline from options merged over the current defaults."""
    return Pipeline(options)
