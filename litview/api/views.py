"""FastAPI view rendering.

``Views`` plays the part of a web framework's view layer: engines are
registered per file extension with the ``(file_path, options, callback)``
contract, and a render turns into an ``HTMLResponse``. Presentation of
failures (status codes) is decided here, not by the engine.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable

from fastapi import HTTPException
from fastapi.responses import HTMLResponse

from litview.config import settings
from litview.core.errors import FileReadError, TemplateError
from litview.engine import view_engine
from litview.runtime.renderer import RenderResult

ViewEngine = Callable[..., Any]


class Views:
    def __init__(self, directory: str | Path | None = None, extension: str | None = None) -> None:
        self.directory = Path(directory or settings.views_dir).resolve()
        self.extension = _normalize_extension(extension or settings.view_extension)
        self._engines: dict[str, ViewEngine] = {}
        self.engine(self.extension, view_engine)

    def engine(self, extension: str, fn: ViewEngine) -> None:
        """Register ``fn(file_path, options, callback)`` for an extension."""
        self._engines[_normalize_extension(extension)] = fn

    @property
    def engines(self) -> dict[str, ViewEngine]:
        return dict(self._engines)

    def resolve(self, name: str | Path) -> tuple[Path, ViewEngine]:
        path = Path(name)
        if not path.suffix:
            path = path.with_name(path.name + self.extension)
        engine = self._engines.get(path.suffix)
        if engine is None:
            raise HTTPException(status_code=500, detail=f"No view engine registered for '{path.suffix}'")
        return self.directory / path, engine

    async def render_result(
            self,
            name: str | Path,
            locals: Mapping[str, Any] | None = None,
            *,
            partials: Mapping[str, str | Path] | None = None,
    ) -> RenderResult:
        path, engine = self.resolve(name)
        options = {
            'locals': dict(locals or {}),
            'partials': {key: self.directory / Path(value) for key, value in (partials or {}).items()},
        }

        done: asyncio.Future[RenderResult] = asyncio.get_running_loop().create_future()

        def callback(error: TemplateError | None, output: str | None) -> None:
            if not done.done():
                done.set_result(RenderResult(output=output, error=error))

        returned = engine(str(path), options, callback)
        if inspect.isawaitable(returned):
            await returned
        return await done

    async def render(
            self,
            name: str | Path,
            locals: Mapping[str, Any] | None = None,
            *,
            partials: Mapping[str, str | Path] | None = None,
            status_code: int = 200,
    ) -> HTMLResponse:
        """Render a view into an HTML response.

        Raises:
            HTTPException: 404 when the view or a partial cannot be read,
                500 for any other render failure.
        """
        result = await self.render_result(name, locals, partials=partials)
        if isinstance(result.error, FileReadError):
            raise HTTPException(status_code=404, detail=str(result.error))
        if result.error is not None:
            raise HTTPException(status_code=500, detail=str(result.error))
        return HTMLResponse(content=result.output, status_code=status_code)


def _normalize_extension(extension: str) -> str:
    extension = extension.strip()
    return extension if extension.startswith('.') else f'.{extension}'
