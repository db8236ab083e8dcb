"""litview: ``${...}`` template views for FastAPI."""
from .core.errors import (
    ArityError,
    EvaluationError,
    FileReadError,
    TemplateError,
    TemplateSyntaxError,
)
from .engine import render, view_engine
from .runtime.binder import BoundParameters, bind_parameters
from .runtime.compiler import CompiledTemplate, compile_template
from .runtime.renderer import Renderer, RenderOptions, RenderResult

__all__ = [
    "render",
    "view_engine",
    "compile_template",
    "bind_parameters",
    "BoundParameters",
    "CompiledTemplate",
    "Renderer",
    "RenderOptions",
    "RenderResult",
    "TemplateError",
    "FileReadError",
    "EvaluationError",
    "TemplateSyntaxError",
    "ArityError",
]
