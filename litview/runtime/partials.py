"""Partial resolution.

Partials are named sub-templates. Each one is read, rendered against the
parent's own locals and merged back in as a plain string before the parent
is compiled. Resolution is one level deep: a partial cannot see other
partials, so ``${otherPartial}`` inside a partial fails unless the caller
also passed ``otherPartial`` as a local.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path

from litview.core.errors import EvaluationError
from litview.domain.template_store import TemplateStore
from litview.runtime.binder import BoundParameters
from litview.runtime.compiler import compile_template


async def read_partials(partials: Mapping[str, str | Path], store: TemplateStore) -> dict[str, str]:
    """Read every partial concurrently; the first read failure propagates."""
    if not partials:
        return {}
    names = list(partials)
    sources = await asyncio.gather(*(store.read(partials[name]) for name in names))
    return dict(zip(names, sources))


async def resolve_partials(
        partials: Mapping[str, str | Path],
        bound: BoundParameters,
        store: TemplateStore,
) -> BoundParameters:
    """Resolve partials and merge them into the parameter set.

    Args:
        partials: Placeholder name to template path.
        bound: The parent's parameters; partials are evaluated against these.
        store: Where partial sources are read from.

    Returns:
        ``bound`` with one extra (or overwritten) name per partial.

    Raises:
        FileReadError: If any partial cannot be read.
        EvaluationError: If any partial fails to evaluate.
    """
    sources = await read_partials(partials, store)

    resolved: dict[str, str] = {}
    for name, source in sources.items():
        output = compile_template(source, bound.names)(*bound.values)
        if isinstance(output, EvaluationError):
            raise output
        resolved[name] = output

    return bound.merged(resolved)
