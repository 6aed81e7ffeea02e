import pytest

from qs_core.utils.sort_parser import parse_sort_array, sort_array_to_mapping
from qs_core.utils.variable_resolver import VariableResolver


@pytest.fixture
def messages():
    return []


@pytest.fixture
def resolver():
    return VariableResolver(
        variables_template={'price': {}, 'created_at': {}},
        transform_name=lambda name, cfg: name.lower(),
    )

# ----------------------------
# Unchecked fields
# ----------------------------

def test_direction_defaults_to_ascending(messages):
    assert parse_sort_array(['a', 'b', -1, 'c'], None, {}, messages) == ['a', 1, 'b', -1, 'c', 1]
    assert messages == []

def test_string_directions(messages):
    assert parse_sort_array(['a', '-1', 'b', '1'], VariableResolver(), {}, messages) == ['a', -1, 'b', 1]

def test_unexpected_numbers(messages):
    assert parse_sort_array([-1, 'a', 2, 1, 1], None, {}, messages) == ['a', 1]
    assert messages == ['skipped, unexpected -1', 'skipped, unexpected 2', 'skipped, unexpected 1']

def test_fields_are_not_checked_without_transform(messages):
    resolver = VariableResolver(variables_template={'price': {}})
    assert parse_sort_array(['name'], resolver, {}, messages) == ['name', 1]

# ----------------------------
# Checked fields
# ----------------------------

def test_known_fields_are_normalized(resolver, messages):
    assert parse_sort_array(['PRICE', -1, 'Created_At'], resolver, {}, messages) == ['price', -1, 'created_at', 1]
    assert messages == []

def test_unknown_field_is_skipped(resolver, messages):
    assert parse_sort_array(['name', -1, 'price'], resolver, {}, messages) == ['price', 1]
    assert messages == ['skipped, sort by field not allowed: name', 'skipped, unexpected -1']

def test_unknown_field_closes_previous_direction(resolver, messages):
    assert parse_sort_array(['price', 'name', -1], resolver, {}, messages) == ['price', 1]
    assert messages == ['skipped, sort by field not allowed: name', 'skipped, unexpected -1']

def test_sort_validated_in_parse_query(messages):
    from qs_core.utils.query_parser import parse_query

    template = {'price': {}}
    result = parse_query({'sort': 'Price|-1|name'}, {}, template, None, lambda name, cfg: name.lower(), messages)
    assert result['pagination'] == {'sort': {'price': -1}, 'sort_default': False}
    assert messages == ['skipped, sort by field not allowed: name']

# ----------------------------
# sort_array_to_mapping
# ----------------------------

def test_sort_array_to_mapping():
    assert sort_array_to_mapping(['a', 1, 'b', -1]) == {'a': 1, 'b': -1}

def test_blank_tokens_are_unexpected(messages):
    assert parse_sort_array(['price', '', ' ', 'name'], None, {}, messages) == ['price', 1, 'name', 1]
    assert messages == ['skipped, unexpected ', 'skipped, unexpected  ']

def test_trailing_pipe_in_parse_query(messages):
    from qs_core.utils.query_parser import parse_query

    result = parse_query({'sort': 'price|'}, {}, None, None, None, messages)
    assert result['pagination'] == {'sort': {'price': 1}, 'sort_default': False}
    assert messages == ['skipped, unexpected ']

def test_falsy_lookup_rejects_sort_field(messages):
    resolver = VariableResolver(
        get_variables=lambda name, cfg: name == 'price',
        transform_name=lambda name, cfg: name,
    )
    assert parse_sort_array(['price', -1, 'secret'], resolver, {}, messages) == ['price', -1]
    assert messages == ['skipped, sort by field not allowed: secret']
