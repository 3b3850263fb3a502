"""Markdown to HTML conversion backed by markdown-it"""

from functools import lru_cache

from markdown_it import MarkdownIt


def _render_text_raw(self, tokens, idx, options, env) -> str:
    """Emit a text token verbatim so template expressions keep their quotes."""
    return tokens[idx].content


@lru_cache(maxsize=None)
def _make_parser(escape: bool) -> MarkdownIt:
    """Build a parser with tables and strikethrough; raw HTML blocks always pass through."""
    md = MarkdownIt("js-default", {"html": True})
    if escape:
        md.add_render_rule("text", _render_text_raw)
    return md


def render_markdown(text: str, escape: bool = False) -> str:
    """Convert Markdown to HTML.

    With escape=True text nodes skip entity escaping, which keeps inline
    `{{ "..." }}` expressions renderable by the template engine afterwards.
    """
    return _make_parser(escape).render(text)
