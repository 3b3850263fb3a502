"""Unit tests for core/render.py"""

import asyncio

import jinja2
import pytest

from mdpage.config import resolve_config
from mdpage.core.render import make_environment, render, render_async
from mdpage.errors import TemplateError


def test_make_environment_searches_base_paths_in_order(tmp_path):
    first, second = tmp_path / "first", tmp_path / "second"
    for d, word in ((first, "first"), (second, "second")):
        d.mkdir()
        (d / "base.html").write_text(word)
    (second / "only.html").write_text("fallback")
    env = make_environment(resolve_config({"base_path": [str(first), str(second)]}))
    assert render(env, '{% include "base.html" %}', {}) == "first"
    assert render(env, '{% include "only.html" %}', {}) == "fallback"


def test_make_environment_forwards_engine_options():
    env = make_environment(resolve_config({"engine_options": {"autoescape": True}}))
    assert render(env, "{{ html }}", {"html": "<b>x</b>"}) == "&lt;b&gt;x&lt;/b&gt;"


def test_make_environment_custom_loader():
    loader = jinja2.DictLoader({"base.html": "from dict"})
    env = make_environment(resolve_config({"loader": loader}))
    assert env.loader is loader
    assert render(env, '{% include "base.html" %}', {}) == "from dict"


def test_environment_hook_called_once_before_render():
    calls = []

    def hook(env):
        calls.append(env)
        env.globals["site_name"] = "Hooked"

    env = make_environment(resolve_config({"environment_hook": hook}))
    assert calls == [env]
    assert render(env, "{{ site_name }}", {}) == "Hooked"


def test_render_wraps_syntax_error():
    env = make_environment(resolve_config())
    with pytest.raises(TemplateError) as exc:
        render(env, "{% if %}", {}, file_name="bad.njk")
    assert exc.value.file_name == "bad.njk"
    assert "TemplateSyntaxError" in exc.value.message
    assert isinstance(exc.value.__cause__, jinja2.TemplateSyntaxError)


def test_render_wraps_missing_template(tmp_path):
    env = make_environment(resolve_config({"base_path": str(tmp_path)}))
    with pytest.raises(TemplateError, match="missing.html"):
        render(env, '{% include "missing.html" %}', {})


def test_render_async_with_sync_environment():
    env = make_environment(resolve_config())
    assert asyncio.run(render_async(env, "{{ a }}", {"a": 1})) == "1"


def test_render_async_environment_both_ways():
    env = make_environment(resolve_config({"engine_options": {"enable_async": True}}))
    assert env.is_async
    assert asyncio.run(render_async(env, "{{ a }}-{{ b }}", {"a": 1, "b": 2})) == "1-2"
    assert render(env, "{{ a }}", {"a": 3}) == "3"


def test_render_wraps_runtime_error():
    env = make_environment(resolve_config())
    with pytest.raises(TemplateError) as exc:
        render(env, "{{ 1 / 0 }}", {}, file_name="div.njk")
    assert exc.value.file_name == "div.njk"
    assert exc.value.message.startswith("ZeroDivisionError")
    assert isinstance(exc.value.__cause__, ZeroDivisionError)


def test_render_wraps_hook_filter_error():
    def explode(value):
        raise RuntimeError("filter failed")

    env = make_environment(resolve_config({"environment_hook": lambda e: e.filters.update(explode=explode)}))
    with pytest.raises(TemplateError, match="RuntimeError: filter failed"):
        render(env, "{{ 'x' | explode }}", {})


def test_render_async_wraps_runtime_error():
    env = make_environment(resolve_config({"engine_options": {"enable_async": True}}))
    with pytest.raises(TemplateError, match="TypeError"):
        asyncio.run(render_async(env, "{{ title + 1 }}", {"title": "x"}))
