"""Template compiler.

``compile_template`` parses the source once and returns a reusable
``CompiledTemplate``. Invoking it never raises for template problems: syntax
errors, bad parameter names, arity mismatches and evaluation failures are all
returned as the call's result so callers can check
``isinstance(result, EvaluationError)``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from litview.config import settings
from litview.core.errors import ArityError, EvaluationError, TemplateSyntaxError
from litview.expression import Interpreter, is_identifier, parse_template
from litview.expression.nodes import TemplateLiteral

_interpreter = Interpreter()


class CompiledTemplate:
    """A template bound to an ordered list of parameter names."""

    def __init__(
            self,
            source: str,
            names: tuple[str, ...],
            template: TemplateLiteral | None = None,
            error: EvaluationError | None = None,
    ) -> None:
        self.source = source
        self.names = names
        self._template = template
        self._error = error

    @property
    def error(self) -> EvaluationError | None:
        """Compile-time error, returned again by every invocation."""
        return self._error

    def __call__(self, *values: Any) -> str | EvaluationError:
        if self._error is not None:
            return self._error
        if len(values) != len(self.names):
            return ArityError(len(self.names), len(values))

        scope = dict(zip(self.names, values))
        try:
            return _interpreter.render(self._template, scope)
        except EvaluationError as exc:
            return exc
        except RecursionError:
            return EvaluationError('Expression nesting is too deep')
        except Exception as exc:  # noqa: BLE001 - boundary wrapper, invocation never raises
            error = EvaluationError(f'{type(exc).__name__}: {exc}')
            error.__cause__ = exc
            return error

    def __repr__(self) -> str:
        return f"CompiledTemplate(names={self.names!r})"


def parse_names(names: str | Sequence[str] | None) -> tuple[str, ...]:
    """Normalize a name list; ``"a, b"`` and ``["a", "b"]`` are equivalent."""
    if names is None:
        return ()
    if isinstance(names, str):
        names = names.split(',')
    return tuple(name.strip() for name in names if name.strip())


def compile_template(text: str, names: str | Sequence[str] | None = None) -> CompiledTemplate:
    """Compile template text against an ordered parameter name list.

    Args:
        text: Template source with ``${...}`` placeholders.
        names: Parameter names, as a sequence or a comma separated string.
            When omitted, the template takes one parameter named
            ``settings.default_key`` (``$`` by default); an empty list or
            string means no parameters.

    Returns:
        A ``CompiledTemplate``; compile errors are reported when it is called.
    """
    if names is None:
        parsed_names: tuple[str, ...] = (settings.default_key,)
    else:
        parsed_names = parse_names(names)

    invalid = [name for name in parsed_names if not is_identifier(name)]
    if invalid:
        error = EvaluationError(f"Invalid parameter name(s): {', '.join(repr(n) for n in invalid)}")
        return CompiledTemplate(text, parsed_names, error=error)

    try:
        template = parse_template(text)
    except TemplateSyntaxError as exc:
        return CompiledTemplate(text, parsed_names, error=exc)
    except RecursionError:
        return CompiledTemplate(text, parsed_names, error=EvaluationError('Template nesting is too deep'))
    return CompiledTemplate(text, parsed_names, template=template)
