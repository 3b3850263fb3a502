"""Jinja2 environment construction and string rendering"""

from typing import Any, Mapping, Optional

import jinja2

from mdpage.config import Settings
from mdpage.errors import TemplateError


def make_loader(settings: Settings) -> jinja2.BaseLoader:
    """Use the configured loader, else search base_path in order."""
    if settings.loader is not None:
        return settings.loader
    return jinja2.FileSystemLoader(settings.base_path)


def make_environment(settings: Settings) -> jinja2.Environment:
    """Build the environment once per pipeline and hand it to the hook, if any."""
    env = jinja2.Environment(loader=make_loader(settings), **settings.engine_options)
    if settings.environment_hook is not None:
        settings.environment_hook(env)
    return env


def _wrap(err: jinja2.TemplateError, file_name: Optional[str]) -> TemplateError:
    message = f"{type(err).__name__}: {err.message or err}"
    if isinstance(err, jinja2.TemplateSyntaxError) and err.lineno:
        message += f" (line {err.lineno})"
    return TemplateError(message, file_name=file_name)


def render(env: jinja2.Environment, source: str, context: Mapping[str, Any], file_name: Optional[str] = None) -> str:
    """Render source against context.

    Engine errors and exceptions raised by template code or filters are
    all reported as TemplateError.

    Async environments are driven to completion on a private event loop,
    so this must not be called from inside a running loop; use
    render_async there.
    """
    try:
        return env.from_string(source).render(context)
    except jinja2.TemplateError as e:
        raise _wrap(e, file_name) from e
    except Exception as e:
        raise TemplateError(f"{type(e).__name__}: {e}", file_name=file_name) from e


async def render_async(env: jinja2.Environment, source: str, context: Mapping[str, Any], file_name: Optional[str] = None) -> str:
    """Awaitable render; sync environments complete without suspending."""
    try:
        template = env.from_string(source)
        if env.is_async:
            return await template.render_async(context)
        return template.render(context)
    except jinja2.TemplateError as e:
        raise _wrap(e, file_name) from e
    except Exception as e:
        raise TemplateError(f"{type(e).__name__}: {e}", file_name=file_name) from e
