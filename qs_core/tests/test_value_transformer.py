import pytest

from qs_core.model.query_model import FieldAccumulator, Operator, VariableDescriptor
from qs_core.utils.value_transformer import default_transfn, split_values, transform_value


@pytest.fixture
def name_values():
    return {}

# ----------------------------
# default_transfn
# ----------------------------

@pytest.mark.parametrize('value, expected', [
    ('123', 123),
    (' 12 ', 12),
    ('-1', -1),
    ('1.5', 1.5),
    ('1e3', 1000.0),
    (' abc ', 'abc'),
    ('', ''),
    (7, 7),
    (None, None),
])
def test_default_transfn(value, expected):
    assert default_transfn(value) == expected

def test_default_transfn_is_idempotent_on_numbers():
    assert default_transfn(default_transfn('42')) == 42

# ----------------------------
# split_values
# ----------------------------

def test_split_scalar_on_pipe():
    assert split_values(' a | b ', Operator.EQ, default_transfn) == ['a', 'b']

def test_regex_is_not_split():
    assert split_values('a|b', Operator.REGEX, default_transfn) == ['a|b']

def test_list_items_are_split():
    assert split_values(['1|2', '3'], Operator.EQ, default_transfn) == [1, 2, 3]

def test_list_items_are_split_for_regex_too():
    assert split_values(['a|b'], Operator.REGEX, default_transfn) == ['a', 'b']

def test_empty_list_gives_nothing():
    assert split_values([], Operator.EQ, default_transfn) == []

def test_none_skips_coercion():
    assert split_values(None, Operator.EQ, lambda x: x + '!') == [None]

# ----------------------------
# transform_value
# ----------------------------

def test_list_slots_accumulate(name_values):
    variable = VariableDescriptor()
    transform_value(variable, 'x', 'a', Operator.EQ, name_values)
    transform_value(variable, 'x', 'b|c', Operator.EQ, name_values)
    assert name_values['x'].eq == ['a', 'b', 'c']

def test_scalar_slots_keep_max_and_min(name_values):
    variable = VariableDescriptor()
    transform_value(variable, 'x', ['5', '9'], Operator.GT, name_values)
    transform_value(variable, 'x', '7', Operator.GT, name_values)
    transform_value(variable, 'x', ['5', '9'], Operator.LT, name_values)
    transform_value(variable, 'x', '7', Operator.LT, name_values)
    assert name_values['x'].gt == 9
    assert name_values['x'].lt == 5

def test_zero_bound_is_combined(name_values):
    variable = VariableDescriptor()
    transform_value(variable, 'x', '0', Operator.GTE, name_values)
    transform_value(variable, 'x', '-5', Operator.GTE, name_values)
    assert name_values['x'].gte == 0

def test_custom_transfn(name_values):
    variable = VariableDescriptor(transfn=float)
    transform_value(variable, 'x', '3', Operator.EQ, name_values)
    assert name_values['x'].eq == [3.0]

def test_non_callable_transfn_falls_back(name_values):
    variable = VariableDescriptor(transfn='int')
    transform_value(variable, 'x', '3', Operator.EQ, name_values)
    assert name_values['x'].eq == [3]

def test_empty_values_are_a_no_op(name_values):
    assert transform_value(VariableDescriptor(), 'x', [], Operator.EQ, name_values) is False
    assert name_values == {}

def test_incomparable_scalars_keep_existing(name_values):
    messages = []
    variable = VariableDescriptor()
    transform_value(variable, 'x', '5', Operator.GT, name_values, messages)
    transform_value(variable, 'x', 'abc', Operator.GT, name_values, messages)
    assert name_values['x'].gt == 5
    assert messages == ['skipped, incomparable values for x']

def test_accumulator_is_created_once(name_values):
    variable = VariableDescriptor()
    transform_value(variable, 'x', '1', Operator.EQ, name_values)
    accumulator = name_values['x']
    transform_value(variable, 'x', '2', Operator.NE, name_values)
    assert name_values['x'] is accumulator
    assert isinstance(accumulator, FieldAccumulator)
    assert accumulator.to_query() == {'eq': [1], 'ne': [2]}
