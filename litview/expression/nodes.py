"""AST for placeholder expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Name:
    name: str


@dataclass(frozen=True)
class TemplateLiteral:
    parts: tuple[Union[str, 'Node'], ...]


@dataclass(frozen=True)
class ArrayLiteral:
    items: tuple['Node', ...]


@dataclass(frozen=True)
class Member:
    obj: 'Node'
    prop: str


@dataclass(frozen=True)
class Index:
    obj: 'Node'
    index: 'Node'


@dataclass(frozen=True)
class Call:
    callee: 'Node'
    args: tuple['Node', ...]


@dataclass(frozen=True)
class Arrow:
    params: tuple[str, ...]
    body: 'Node'


@dataclass(frozen=True)
class Unary:
    op: str
    operand: 'Node'


@dataclass(frozen=True)
class Binary:
    op: str
    left: 'Node'
    right: 'Node'


@dataclass(frozen=True)
class Logical:
    """Short-circuiting ``&&``, ``||`` and ``??``."""

    op: str
    left: 'Node'
    right: 'Node'


@dataclass(frozen=True)
class Conditional:
    test: 'Node'
    consequent: 'Node'
    alternate: 'Node'


Node = Union[
    Literal, Name, TemplateLiteral, ArrayLiteral, Member, Index, Call,
    Arrow, Unary, Binary, Logical, Conditional,
]
