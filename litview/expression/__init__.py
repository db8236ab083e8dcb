"""Restricted expression language used inside ``${...}`` placeholders."""
from .interpreter import ArrowFunction, Interpreter
from .lexer import KEYWORDS, is_identifier
from .parser import parse_expression, parse_template
from .values import UNDEFINED, to_text, truthy
