"""Recursive-descent parser for templates and placeholder expressions.

Precedence, lowest first:

    arrow / conditional   a ? b : c,  x => body
    logical or            ||  ??
    logical and           &&
    equality              ==  !=  ===  !==
    relational            <  <=  >  >=
    additive              +  -
    multiplicative        *  /  %
    unary                 !  -  +  typeof
    postfix               a.b  a[b]  a(b)
"""

from __future__ import annotations

from typing import Callable

from litview.core.errors import TemplateSyntaxError
from litview.expression.lexer import KEYWORDS, Lexer, Token, read_escape
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
from litview.expression.values import UNDEFINED

_KEYWORD_LITERALS = {
    'true': True,
    'false': False,
    'null': None,
    'undefined': UNDEFINED,
}


class Parser:
    def __init__(self, source: str) -> None:
        self._source = source
        self._lexer = Lexer(source)
        self._lookahead: Token | None = None

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse_template(self) -> TemplateLiteral:
        parts, _ = self._scan_template(0, closing=None)
        return TemplateLiteral(parts)

    def parse_expression(self) -> Node:
        node = self._parse_expression()
        token = self._peek()
        if token.kind != 'eof':
            raise TemplateSyntaxError(f"Unexpected token '{token.value}'", token.start)
        return node

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._lookahead is None:
            self._lookahead = self._lexer.next_token()
        return self._lookahead

    def _advance(self) -> Token:
        token = self._peek()
        self._lookahead = None
        return token

    def _at(self, *values: str) -> bool:
        token = self._peek()
        return token.kind == 'punct' and token.value in values

    def _accept(self, value: str) -> bool:
        if self._at(value):
            self._advance()
            return True
        return False

    def _expect(self, value: str) -> Token:
        token = self._peek()
        if not self._at(value):
            found = 'end of input' if token.kind == 'eof' else f"'{token.value}'"
            raise TemplateSyntaxError(f"Expected '{value}' but found {found}", token.start)
        return self._advance()

    def _seek(self, pos: int) -> None:
        self._lexer.pos = pos
        self._lookahead = None

    # ------------------------------------------------------------------
    # Template text
    # ------------------------------------------------------------------

    def _scan_template(self, start: int, closing: str | None) -> tuple[tuple[str | Node, ...], int]:
        """Scan literal text up to ``closing`` (or end of input at top level)."""
        source = self._source
        parts: list[str | Node] = []
        chunk: list[str] = []
        pos = start

        while pos < len(source):
            char = source[pos]

            if closing is not None and char == closing:
                _flush(chunk, parts)
                return tuple(parts), pos + 1

            if char == '\\':
                if closing is None:
                    # Top-level text only understands \${
                    if source.startswith('${', pos + 1):
                        chunk.append('${')
                        pos += 3
                    else:
                        chunk.append(char)
                        pos += 1
                    continue
                decoded, pos = read_escape(source, pos)
                chunk.append(decoded)
                continue

            if source.startswith('${', pos):
                _flush(chunk, parts)
                parts.append(self._parse_placeholder(pos + 2))
                pos = self._lexer.pos
                continue

            chunk.append(char)
            pos += 1

        if closing is not None:
            raise TemplateSyntaxError('Unterminated template literal', start - 1)
        _flush(chunk, parts)
        return tuple(parts), pos

    def _parse_placeholder(self, pos: int) -> Node:
        self._seek(pos)
        if self._at('}'):
            raise TemplateSyntaxError('Empty placeholder', pos - 2)
        node = self._parse_expression()
        token = self._peek()
        if not self._at('}'):
            if token.kind == 'eof':
                raise TemplateSyntaxError('Unterminated placeholder', pos - 2)
            raise TemplateSyntaxError(f"Unexpected token '{token.value}' in placeholder", token.start)
        self._advance()
        return node

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Node:
        arrow = self._try_parse_arrow()
        if arrow is not None:
            return arrow
        return self._parse_conditional()

    def _parse_conditional(self) -> Node:
        test = self._parse_logical_or()
        if self._accept('?'):
            consequent = self._parse_expression()
            self._expect(':')
            alternate = self._parse_expression()
            return Conditional(test, consequent, alternate)
        return test

    def _try_parse_arrow(self) -> Arrow | None:
        """Parse ``x => body`` or ``(x, y) => body``; rewind when it is neither."""
        token = self._peek()
        if token.kind == 'name':
            if token.value in KEYWORDS:
                return None
        elif not self._at('('):
            return None

        saved = (self._lexer.pos, self._lookahead)
        try:
            params = self._parse_arrow_params()
        except TemplateSyntaxError:
            params = None

        if params is None:
            self._lexer.pos, self._lookahead = saved
            return None
        return Arrow(params, self._parse_expression())

    def _parse_arrow_params(self) -> tuple[str, ...] | None:
        token = self._advance()
        if token.kind == 'name':
            return (token.value,) if self._accept('=>') else None

        params: list[str] = []
        if not self._at(')'):
            while True:
                param = self._peek()
                if param.kind != 'name' or param.value in KEYWORDS:
                    return None
                self._advance()
                params.append(param.value)
                if not self._accept(','):
                    break
        if self._accept(')') and self._accept('=>'):
            return tuple(params)
        return None

    def _parse_binary(self, ops: tuple[str, ...], operand: Callable[[], Node], factory=Binary) -> Node:
        left = operand()
        while self._at(*ops):
            op = self._advance().value
            left = factory(op, left, operand())
        return left

    def _parse_logical_or(self) -> Node:
        return self._parse_binary(('||', '??'), self._parse_logical_and, Logical)

    def _parse_logical_and(self) -> Node:
        return self._parse_binary(('&&',), self._parse_equality, Logical)

    def _parse_equality(self) -> Node:
        return self._parse_binary(('===', '!==', '==', '!='), self._parse_relational)

    def _parse_relational(self) -> Node:
        return self._parse_binary(('<', '<=', '>', '>='), self._parse_additive)

    def _parse_additive(self) -> Node:
        return self._parse_binary(('+', '-'), self._parse_multiplicative)

    def _parse_multiplicative(self) -> Node:
        return self._parse_binary(('*', '/', '%'), self._parse_unary)

    def _parse_unary(self) -> Node:
        token = self._peek()
        if self._at('!', '-', '+') or (token.kind == 'name' and token.value == 'typeof'):
            self._advance()
            return Unary(token.value, self._parse_unary())
        return self._parse_postfix()

    def _parse_postfix(self) -> Node:
        node = self._parse_primary()
        while True:
            if self._accept('.'):
                token = self._advance()
                if token.kind != 'name':
                    raise TemplateSyntaxError('Expected property name after \'.\'', token.start)
                node = Member(node, token.value)
            elif self._accept('['):
                index = self._parse_expression()
                self._expect(']')
                node = Index(node, index)
            elif self._accept('('):
                node = Call(node, self._parse_sequence(')'))
            else:
                return node

    def _parse_sequence(self, closing: str) -> tuple[Node, ...]:
        """Comma separated expressions up to ``closing``; a trailing comma is allowed."""
        items: list[Node] = []
        while not self._at(closing):
            items.append(self._parse_expression())
            if not self._accept(','):
                break
        self._expect(closing)
        return tuple(items)

    def _parse_primary(self) -> Node:
        token = self._advance()

        if token.kind in ('num', 'str'):
            return Literal(token.value)

        if token.kind == 'name':
            if token.value in _KEYWORD_LITERALS:
                return Literal(_KEYWORD_LITERALS[token.value])
            if token.value in KEYWORDS:
                raise TemplateSyntaxError(f"Unexpected keyword '{token.value}'", token.start)
            return Name(token.value)

        if token.kind == 'eof':
            raise TemplateSyntaxError('Unexpected end of expression', token.start)

        if token.value == '(':
            node = self._parse_expression()
            self._expect(')')
            return node

        if token.value == '[':
            return ArrayLiteral(self._parse_sequence(']'))

        if token.value == '`':
            parts, end = self._scan_template(token.end, closing='`')
            self._seek(end)
            return TemplateLiteral(parts)

        raise TemplateSyntaxError(f"Unexpected token '{token.value}'", token.start)


def _flush(chunk: list[str], parts: list[str | Node]) -> None:
    if chunk:
        parts.append(''.join(chunk))
        chunk.clear()


def parse_template(source: str) -> TemplateLiteral:
    """Parse template text into literal chunks and placeholder expressions."""
    return Parser(source).parse_template()


def parse_expression(source: str) -> Node:
    """Parse a single expression (no surrounding ``${}``)."""
    return Parser(source).parse_expression()
