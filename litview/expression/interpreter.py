"""Tree-walking interpreter for placeholder expressions.

Only the node types in :mod:`litview.expression.nodes` are executable. There
is no route from a template to ``eval``, imports, attribute names starting
with an underscore, or any callable the caller did not put into scope
themselves.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Mapping
from typing import Any

from litview.core.errors import EvaluationError
from litview.expression import values
from litview.expression.nodes import (
    Arrow,
    ArrayLiteral,
    Binary,
    Call,
    Conditional,
    Index,
    Literal,
    Logical,
    Member,
    Name,
    Node,
    TemplateLiteral,
    Unary,
)


class ArrowFunction:
    """Closure produced by an arrow expression (``x => x.name``)."""

    def __init__(self, node: Arrow, scope: Mapping[str, Any], interpreter: 'Interpreter') -> None:
        self._node = node
        self._scope = scope
        self._interpreter = interpreter

    def __call__(self, *args: Any) -> Any:
        params = self._node.params
        bound = {name: args[i] if i < len(args) else values.UNDEFINED for i, name in enumerate(params)}
        return self._interpreter.evaluate(self._node.body, ChainMap(bound, self._scope))

    def __repr__(self) -> str:
        return f"<arrow ({', '.join(self._node.params)})>"


class Interpreter:
    def evaluate(self, node: Node, scope: Mapping[str, Any]) -> Any:
        handler = getattr(self, f'_eval_{type(node).__name__}', None)
        if handler is None:
            raise EvaluationError(f'Unsupported expression node: {type(node).__name__}')
        return handler(node, scope)

    def render(self, template: TemplateLiteral, scope: Mapping[str, Any]) -> str:
        return self._eval_TemplateLiteral(template, scope)

    def _eval_Literal(self, node: Literal, scope: Mapping[str, Any]) -> Any:
        return node.value

    def _eval_Name(self, node: Name, scope: Mapping[str, Any]) -> Any:
        if node.name not in scope:
            raise EvaluationError(f'{node.name} is not defined')
        return scope[node.name]

    def _eval_TemplateLiteral(self, node: TemplateLiteral, scope: Mapping[str, Any]) -> str:
        chunks: list[str] = []
        for part in node.parts:
            if isinstance(part, str):
                chunks.append(part)
            else:
                chunks.append(values.to_text(self.evaluate(part, scope)))
        return ''.join(chunks)

    def _eval_ArrayLiteral(self, node: ArrayLiteral, scope: Mapping[str, Any]) -> list[Any]:
        return [self.evaluate(item, scope) for item in node.items]

    def _eval_Member(self, node: Member, scope: Mapping[str, Any]) -> Any:
        return values.get_member(self.evaluate(node.obj, scope), node.prop)

    def _eval_Index(self, node: Index, scope: Mapping[str, Any]) -> Any:
        obj = self.evaluate(node.obj, scope)
        key = self.evaluate(node.index, scope)
        if not (isinstance(key, str) or values.is_number(key)):
            key = values.to_text(key)
        return values.get_member(obj, key)

    def _eval_Call(self, node: Call, scope: Mapping[str, Any]) -> Any:
        fn = self.evaluate(node.callee, scope)
        if not callable(fn):
            raise EvaluationError(f'{_describe(node.callee)} is not a function')
        args = [self.evaluate(arg, scope) for arg in node.args]
        try:
            return fn(*args)
        except EvaluationError:
            raise
        except Exception as exc:  # noqa: BLE001 - boundary wrapper for caller-supplied callables
            raise EvaluationError(f'{_describe(node.callee)} failed: {exc}') from exc

    def _eval_Arrow(self, node: Arrow, scope: Mapping[str, Any]) -> ArrowFunction:
        return ArrowFunction(node, scope, self)

    def _eval_Unary(self, node: Unary, scope: Mapping[str, Any]) -> Any:
        if node.op == 'typeof' and isinstance(node.operand, Name) and node.operand.name not in scope:
            return 'undefined'
        operand = self.evaluate(node.operand, scope)
        if node.op == '!':
            return not values.truthy(operand)
        if node.op == '-':
            return -values.to_number(operand)
        if node.op == '+':
            return values.to_number(operand)
        return values.type_of(operand)

    def _eval_Binary(self, node: Binary, scope: Mapping[str, Any]) -> Any:
        left = self.evaluate(node.left, scope)
        right = self.evaluate(node.right, scope)
        op = node.op
        if op == '+':
            return values.add(left, right)
        if op in ('-', '*', '/', '%'):
            return values.arithmetic(op, left, right)
        if op in ('<', '<=', '>', '>='):
            return values.compare(op, left, right)
        if op == '===':
            return values.strict_equals(left, right)
        if op == '!==':
            return not values.strict_equals(left, right)
        if op == '==':
            return values.loose_equals(left, right)
        if op == '!=':
            return not values.loose_equals(left, right)
        raise EvaluationError(f"Unsupported operator '{op}'")

    def _eval_Logical(self, node: Logical, scope: Mapping[str, Any]) -> Any:
        left = self.evaluate(node.left, scope)
        if node.op == '&&':
            return self.evaluate(node.right, scope) if values.truthy(left) else left
        if node.op == '||':
            return left if values.truthy(left) else self.evaluate(node.right, scope)
        return self.evaluate(node.right, scope) if values.is_nullish(left) else left

    def _eval_Conditional(self, node: Conditional, scope: Mapping[str, Any]) -> Any:
        if values.truthy(self.evaluate(node.test, scope)):
            return self.evaluate(node.consequent, scope)
        return self.evaluate(node.alternate, scope)


def _describe(node: Node) -> str:
    if isinstance(node, Name):
        return node.name
    if isinstance(node, Member):
        return f'{_describe(node.obj)}.{node.prop}'
    if isinstance(node, Index):
        return f'{_describe(node.obj)}[...]'
    return 'expression'
