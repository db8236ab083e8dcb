"""Tokenizer for placeholder expressions.

The lexer is pull-based: the parser asks for one token at a time starting
from ``pos``. Template literal bodies are not tokenized here; the parser
scans them character by character and moves ``pos`` past them itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from litview.core.errors import TemplateSyntaxError

KEYWORDS = frozenset({'true', 'false', 'null', 'undefined', 'typeof'})

_IDENTIFIER = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')
_NUMBER = re.compile(r'(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
_WHITESPACE = re.compile(r'\s*')
_DIGITS = frozenset('0123456789')

# Longest first so '===' wins over '=='
_PUNCTUATORS = (
    '===', '!==',
    '=>', '==', '!=', '<=', '>=', '&&', '||', '??',
    '+', '-', '*', '/', '%', '<', '>', '!', '?', ':', '.', ',',
    '(', ')', '[', ']', '{', '}', '`',
)

_STRING_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
    '0': '\0',
}


@dataclass(frozen=True)
class Token:
    kind: str  # 'num', 'str', 'name', 'punct' or 'eof'
    value: Any
    start: int
    end: int


def is_identifier(name: str) -> bool:
    """True when ``name`` can be bound as a template parameter."""
    return bool(_IDENTIFIER.fullmatch(name)) and name not in KEYWORDS


def read_escape(source: str, pos: int) -> tuple[str, int]:
    """Decode the escape sequence whose backslash sits at ``pos``."""
    if pos + 1 >= len(source):
        raise TemplateSyntaxError('Dangling escape character', pos)
    char = source[pos + 1]
    if char == 'u':
        digits = source[pos + 2:pos + 6]
        if len(digits) != 4 or not all(c in '0123456789abcdefABCDEF' for c in digits):
            raise TemplateSyntaxError('Invalid unicode escape', pos)
        return chr(int(digits, 16)), pos + 6
    if char == '\n':
        # Line continuation
        return '', pos + 2
    return _STRING_ESCAPES.get(char, char), pos + 2


class Lexer:
    def __init__(self, source: str, pos: int = 0) -> None:
        self.source = source
        self.pos = pos

    def next_token(self) -> Token:
        source = self.source
        pos = _WHITESPACE.match(source, self.pos).end()

        if pos >= len(source):
            self.pos = pos
            return Token('eof', None, pos, pos)

        char = source[pos]

        if char in '\'"':
            value, end = self._read_string(pos)
            return self._emit('str', value, pos, end)

        if char in _DIGITS or (char == '.' and source[pos + 1:pos + 2] in _DIGITS):
            match = _NUMBER.match(source, pos)
            text = match.group()
            if any(c in text for c in '.eE'):
                value: Any = float(text)
            else:
                try:
                    value = int(text)
                except ValueError as exc:
                    raise TemplateSyntaxError(f'Number literal is too long: {exc}', pos) from exc
            return self._emit('num', value, pos, match.end())

        match = _IDENTIFIER.match(source, pos)
        if match:
            return self._emit('name', match.group(), pos, match.end())

        for punct in _PUNCTUATORS:
            if source.startswith(punct, pos):
                return self._emit('punct', punct, pos, pos + len(punct))

        raise TemplateSyntaxError(f"Unexpected character '{char}'", pos)

    def _emit(self, kind: str, value: Any, start: int, end: int) -> Token:
        self.pos = end
        return Token(kind, value, start, end)

    def _read_string(self, start: int) -> tuple[str, int]:
        source = self.source
        quote = source[start]
        chunks: list[str] = []
        pos = start + 1
        while pos < len(source):
            char = source[pos]
            if char == quote:
                return ''.join(chunks), pos + 1
            if char == '\\':
                decoded, pos = read_escape(source, pos)
                chunks.append(decoded)
                continue
            if char == '\n':
                break
            chunks.append(char)
            pos += 1
        raise TemplateSyntaxError('Unterminated string literal', start)
