"""Template renderer.

We keep rendering separate from the entry point so:
- it can be tested against an in-memory store
- it can be reused by the view engine adapter and by direct callers
- every failure funnels into a single RenderResult
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from litview.config import settings
from litview.core.errors import EvaluationError, FileReadError, TemplateError
from litview.domain.template_store import TemplateStore
from litview.observability.tracing import Span, log_event, new_trace_id
from litview.runtime.binder import BoundParameters, bind_parameters
from litview.runtime.compiler import compile_template
from litview.runtime.partials import resolve_partials

RenderCallback = Callable[[Optional[TemplateError], Optional[str]], Any]


class RenderOptions(BaseModel):
    """Options accepted by the asynchronous render path.

    Unknown keys are ignored so a host framework can pass its whole options
    object through.
    """

    model_config = ConfigDict(extra='ignore')

    locals: dict[str, Any] = Field(
        default_factory=dict,
        description="Named values available to the template"
    )

    partials: dict[str, str | Path] = Field(
        default_factory=dict,
        description="Placeholder name to sub-template path"
    )

    template: bool = Field(
        default=False,
        description="Treat the first argument as template text instead of a path"
    )

    namespaced: bool = Field(
        default=False,
        description="Expose locals as properties of the default key instead of as names"
    )


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one render request: exactly one of output or error is set."""

    output: str | None = None
    error: TemplateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, output: str) -> 'RenderResult':
        return cls(output=output)

    @classmethod
    def failure(cls, error: TemplateError) -> 'RenderResult':
        return cls(error=error)

    def deliver(self, callback: RenderCallback | None) -> 'RenderResult':
        """Invoke a ``callback(error, output)`` with this outcome, once."""
        if callback is not None:
            callback(self.error, self.output)
        return self


class Renderer:
    """Reads, binds, compiles and evaluates one template per call."""

    def __init__(self, store: TemplateStore) -> None:
        self._store = store

    @property
    def store(self) -> TemplateStore:
        return self._store

    async def render(
            self,
            source: str | Path,
            options: RenderOptions | None = None,
            callback: RenderCallback | None = None,
    ) -> RenderResult:
        """Render a template file (or inline text when ``options.template``).

        Args:
            source: Template path, or template text in inline mode.
            options: Locals, partials and mode flags.
            callback: Optional ``callback(error, output)``, called exactly once.

        Returns:
            The render outcome. Template, read and evaluation failures are
            returned in ``RenderResult.error``, never raised.
        """
        options = options or RenderOptions()
        trace_id = new_trace_id()
        span = Span(
            name='render',
            trace_id=trace_id,
            attributes={
                'source': '<inline>' if options.template else str(source),
                'partials': sorted(options.partials),
            },
        )
        log_event('render.start', trace_id=trace_id, source=span.attributes['source'])

        try:
            output = await self._render(source, options, trace_id)
        except TemplateError as exc:
            result = RenderResult.failure(exc)
        except Exception as exc:  # noqa: BLE001 - boundary wrapper for store failures
            error = FileReadError(str(source), str(exc))
            error.__cause__ = exc
            result = RenderResult.failure(error)
        else:
            result = RenderResult.success(output)

        span.end()
        if result.ok:
            log_event('render.end', trace_id=trace_id, span=span, chars=len(result.output))
        else:
            log_event(
                'render.error',
                trace_id=trace_id,
                span=span,
                error_type=type(result.error).__name__,
                error=str(result.error),
            )
        return result.deliver(callback)

    async def _render(self, source: str | Path, options: RenderOptions, trace_id: str) -> str:
        bound = self._bind(options)

        if options.partials:
            bound = await resolve_partials(options.partials, bound, self._store)
            log_event('render.partials.resolved', trace_id=trace_id, count=len(options.partials))

        if options.template:
            text = str(source)
        else:
            text = await self._store.read(source)

        output = compile_template(text, bound.names)(*bound.values)
        if isinstance(output, EvaluationError):
            raise output
        return output

    @staticmethod
    def _bind(options: RenderOptions) -> BoundParameters:
        if options.namespaced:
            return bind_parameters(value=dict(options.locals), default_key=settings.default_key)
        return bind_parameters(options.locals)
