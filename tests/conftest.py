"""Root test configuration: template fixtures and process-wide default hygiene"""

from pathlib import Path

import pytest

from mdpage.config import reset_defaults
from mdpage.core.models import SourceFile


LAYOUT = "<title>{{ page.title }} | {{ site.title }}</title><main>{% block content %}<p>default</p>{% endblock %}</main>"
BASE = "Hello, {{ title }}!"


@pytest.fixture(autouse=True)
def restore_defaults():
    """set_defaults is process-wide; undo it after every test."""
    yield
    reset_defaults()


@pytest.fixture(name="templates")
def templates_fixture(tmp_path) -> Path:
    """Template search root holding the shared layout and base templates."""
    root = tmp_path / "templates"
    root.mkdir()
    (root / "layout.html").write_text(LAYOUT)
    (root / "base.html").write_text(BASE)
    return root


@pytest.fixture(name="make_file")
def make_file_fixture(tmp_path):
    """Factory writing a page under tmp_path/pages and returning its SourceFile."""
    pages = tmp_path / "pages"
    pages.mkdir(exist_ok=True)

    def _make(name: str, text: str, data: dict = None) -> SourceFile:
        p = pages / name
        p.write_text(text, encoding="utf-8")
        return SourceFile.from_path(p, data=data)

    return _make
