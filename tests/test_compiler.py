from __future__ import annotations

import pytest

from litview.core.errors import ArityError, EvaluationError, TemplateSyntaxError
from litview.runtime.compiler import CompiledTemplate, compile_template, parse_names


@pytest.mark.parametrize(
    'text',
    ['', 'plain text', 'a `b` {c} $d', 'line one\nline two\\n', '<p class="x">100%</p>'],
)
def test_text_without_placeholders_is_unchanged(text: str) -> None:
    assert compile_template(text, [])() == text


@pytest.mark.parametrize(
    ('name', 'value', 'expected'),
    [
        ('count', 3, '3'),
        ('ratio', 0.5, '0.5'),
        ('total', 2.0, '2'),
        ('flag', True, 'true'),
        ('label', 'x', 'x'),
        ('nothing', None, 'null'),
    ],
)
def test_single_placeholder_renders_text_of_primitive(name: str, value, expected: str) -> None:
    compiled = compile_template('${' + name + '}', [name])
    assert compiled(value) == expected


def test_inline_compile_with_name_string() -> None:
    # Arrange
    compiled = compile_template('${engineName} - fastest!', 'engineName')

    # Act
    output = compiled('jessica')

    # Assert
    assert output == 'jessica - fastest!'


def test_ternary_with_nested_template_literal() -> None:
    text = "${maintainedBy ? `a template engine maintained by ${maintainedBy}` : 'not maintained anymore'}."
    compiled = compile_template(text, ['maintainedBy'])

    assert compiled('Good Samaritans') == 'a template engine maintained by Good Samaritans.'
    assert compiled('') == 'not maintained anymore.'


def test_default_key_binds_single_object() -> None:
    compiled = compile_template('<h1>${$.title}</h1>')

    assert compiled.names == ('$',)
    assert compiled({'title': 'Hi'}) == '<h1>Hi</h1>'


def test_precompiled_template_is_reusable() -> None:
    compiled = compile_template('${a}+${b}', 'a, b')

    assert compiled(1, 2) == '1+2'
    assert compiled('x', 'y') == 'x+y'


@pytest.mark.parametrize('values', [(), (1, 2)])
def test_arity_mismatch_is_returned(values: tuple) -> None:
    compiled = compile_template('${a}', 'a')

    result = compiled(*values)

    assert isinstance(result, ArityError)
    assert result.expected == 1
    assert result.received == len(values)


def test_undefined_name_is_returned_not_raised() -> None:
    result = compile_template('${missing}', [])()

    assert isinstance(result, EvaluationError)
    assert 'missing is not defined' in str(result)


def test_syntax_error_is_returned_on_every_call() -> None:
    compiled = compile_template('Hello ${name', 'name')

    assert isinstance(compiled.error, TemplateSyntaxError)
    assert compiled('a') is compiled.error
    assert compiled('b') is compiled.error


@pytest.mark.parametrize('names', [['class-name'], ['typeof'], ['ok', '1st']])
def test_invalid_parameter_names_surface_as_evaluation_errors(names: list[str]) -> None:
    compiled = compile_template('text', names)

    result = compiled(*range(len(names)))

    assert isinstance(result, EvaluationError)
    assert 'Invalid parameter name' in str(result)


def test_deep_nesting_is_an_evaluation_error() -> None:
    text = '${' + '(' * 5000 + '1' + ')' * 5000 + '}'

    result = compile_template(text, [])()

    assert isinstance(result, EvaluationError)


def test_parse_names() -> None:
    assert parse_names(' a , b ,') == ('a', 'b')
    assert parse_names(['a', 'b']) == ('a', 'b')
    assert parse_names('') == ()
    assert parse_names(None) == ()


def test_compiled_template_repr() -> None:
    assert repr(compile_template('x', 'a')) == "CompiledTemplate(names=('a',))"
    assert isinstance(compile_template('x'), CompiledTemplate)


class Profile:
    @property
    def name(self) -> str:
        raise ValueError('boom')


class Opaque:
    def __str__(self) -> str:
        raise RuntimeError('no text form')


class Flaky(dict):
    def __contains__(self, key) -> bool:
        raise KeyError(key)


@pytest.mark.parametrize(
    ('text', 'value', 'message'),
    [
        ('${user.name}', Profile(), "Reading 'name' failed: boom"),
        ('${user}', Opaque(), 'Cannot convert Opaque to text: no text form'),
        ('${user.name}', Flaky(), 'KeyError'),
    ],
)
def test_caller_object_failures_are_returned(text: str, value, message: str) -> None:
    result = compile_template(text, 'user')(value)

    assert isinstance(result, EvaluationError)
    assert message in str(result)


def test_oversized_integer_literal_is_a_syntax_error() -> None:
    compiled = compile_template('${' + '9' * 5000 + '}', [])

    assert isinstance(compiled.error, TemplateSyntaxError)
    assert isinstance(compiled(), TemplateSyntaxError)


def test_oversized_integer_value_is_returned() -> None:
    result = compile_template('${n}', 'n')(10 ** 5000)

    assert isinstance(result, EvaluationError)
    assert 'too large' in str(result)
