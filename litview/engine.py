"""Entry points.

``render`` is the single callable most code needs. It routes on the shape of
its arguments:

    render(text)                       -> CompiledTemplate bound to ``$``
    render(text, 'a, b')               -> CompiledTemplate bound to a, b
    render(path, {'locals': {...}})    -> awaitable RenderResult
    render(text, {'template': True})   -> awaitable RenderResult, no file read

``view_engine`` is the three-argument ``(file_path, options, callback)``
adapter that ``litview.api.views.Views`` registers per file extension.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from pathlib import Path
from typing import Any, overload

from pydantic import ValidationError

from litview.config import settings
from litview.core.errors import TemplateError
from litview.domain.template_store import FilesystemTemplateStore, TemplateStore
from litview.runtime.compiler import CompiledTemplate, compile_template
from litview.runtime.renderer import RenderCallback, Renderer, RenderOptions, RenderResult


def _project_store() -> TemplateStore:
    return FilesystemTemplateStore(base_dir=settings.project_root, encoding=settings.encoding)


def _views_store() -> TemplateStore:
    return FilesystemTemplateStore(base_dir=settings.views_dir, encoding=settings.encoding)


def _coerce_options(options: Mapping[str, Any] | RenderOptions) -> RenderOptions:
    if isinstance(options, RenderOptions):
        return options
    if not isinstance(options, Mapping):
        raise TemplateError(f'Render options must be a mapping, got {type(options).__name__}')
    try:
        return RenderOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise TemplateError(f'Invalid render options: {exc}') from exc


async def _failed(error: TemplateError, callback: RenderCallback | None) -> RenderResult:
    return RenderResult.failure(error).deliver(callback)


def _schedule(coro: Awaitable[RenderResult], callback: RenderCallback | None) -> Awaitable[RenderResult]:
    """Start the render right away when a callback is waiting for it."""
    if callback is None:
        return coro
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return coro
    return loop.create_task(coro)


@overload
def render(source: str, options: str | Sequence[str] | None = None) -> CompiledTemplate:
    ...


@overload
def render(
        source: str | Path,
        options: Mapping[str, Any] | RenderOptions,
        callback: RenderCallback | None = None,
        *,
        store: TemplateStore | None = None,
) -> Awaitable[RenderResult]:
    ...


def render(source, options=None, callback=None, *, store=None):
    """Compile template text, or render a template file asynchronously.

    Args:
        source: Template text (compile mode, or ``template=True``) or a path
            relative to ``settings.project_root``.
        options: A parameter name list selects synchronous compilation. A
            mapping / ``RenderOptions`` selects asynchronous rendering.
        callback: Optional ``callback(error, output)`` for the async path.
        store: Overrides where template and partial sources are read from.

    Returns:
        ``CompiledTemplate`` for compilation, otherwise an awaitable that
        resolves to a ``RenderResult`` (errors are never raised from it).
    """
    if callback is None and (options is None or isinstance(options, (str, list, tuple))):
        return compile_template(source, options)

    if options is None:
        options = RenderOptions()
    try:
        render_options = _coerce_options(options)
    except TemplateError as exc:
        return _schedule(_failed(exc, callback), callback)

    renderer = Renderer(store or _project_store())
    return _schedule(renderer.render(source, render_options, callback), callback)


def view_engine(
        file_path: str | Path,
        options: Mapping[str, Any] | RenderOptions,
        callback: RenderCallback | None = None,
        *,
        store: TemplateStore | None = None,
) -> Awaitable[RenderResult]:
    """View engine adapter with the host framework's three-argument shape.

    ``options`` is the framework's options object: ``locals`` and
    ``partials`` are honoured, everything else is ignored. Paths resolve
    against ``settings.views_dir``.
    """
    try:
        render_options = _coerce_options(options)
    except TemplateError as exc:
        return _schedule(_failed(exc, callback), callback)

    if render_options.template:
        render_options = render_options.model_copy(update={'template': False})

    renderer = Renderer(store or _views_store())
    return _schedule(renderer.render(file_path, render_options, callback), callback)
