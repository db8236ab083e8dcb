from __future__ import annotations

from litview.runtime.binder import BoundParameters, bind_parameters


def test_bind_mapping_keeps_insertion_order() -> None:
    bound = bind_parameters({'b': 2, 'a': 1, 'c': 3})

    assert bound.names == ('b', 'a', 'c')
    assert bound.values == (2, 1, 3)


def test_bind_single_value_under_default_key() -> None:
    payload = {'title': 'Hi'}

    bound = bind_parameters(value=payload)

    assert bound.names == ('$',)
    assert bound.values[0] is payload


def test_bind_single_value_under_custom_key() -> None:
    bound = bind_parameters({'ignored': 1}, value=None, default_key='data')

    assert bound == BoundParameters(('data',), (None,))


def test_bind_nothing() -> None:
    assert bind_parameters() == BoundParameters()
    assert bind_parameters({}) == BoundParameters()


def test_names_are_not_validated_at_bind_time() -> None:
    bound = bind_parameters({'not-an-identifier': 1, 'class': 2})

    assert bound.names == ('not-an-identifier', 'class')


def test_merged_overwrites_in_place_and_appends() -> None:
    bound = bind_parameters({'title': 'Old', 'user': 'ada'})

    merged = bound.merged({'title': 'New', 'main': '<p>hi</p>'})

    assert merged.names == ('title', 'user', 'main')
    assert merged.values == ('New', 'ada', '<p>hi</p>')
    assert bound.values == ('Old', 'ada')
