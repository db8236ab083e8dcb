"""Parameter binding.

Turns the caller's locals into the ordered ``(names, values)`` pair a
compiled template is invoked with. Values are passed positionally, so the
two tuples always keep the same order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from litview.config import settings

_MISSING = object()


@dataclass(frozen=True)
class BoundParameters:
    names: tuple[str, ...] = ()
    values: tuple[Any, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self.names, self.values))

    def merged(self, extra: Mapping[str, Any]) -> 'BoundParameters':
        """Overwrite existing names in place and append new ones."""
        combined = self.as_dict()
        combined.update(extra)
        return BoundParameters(tuple(combined), tuple(combined.values()))


def bind_parameters(
        locals: Mapping[str, Any] | None = None,
        *,
        value: Any = _MISSING,
        default_key: str | None = None,
) -> BoundParameters:
    """Bind locals by name, or a single value under the default key.

    Args:
        locals: Named values; each key becomes a template parameter.
        value: A single value exposed as ``default_key`` (``${$.title}``).
            Takes precedence over ``locals``.
        default_key: Overrides ``settings.default_key``.

    Returns:
        The ordered binding.
    """
    if value is not _MISSING:
        key = default_key or settings.default_key
        return BoundParameters((key,), (value,))

    if not locals:
        return BoundParameters()
    return BoundParameters(tuple(locals.keys()), tuple(locals.values()))
