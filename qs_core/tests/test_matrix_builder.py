import pytest

from qs_core.model.query_model import FieldAccumulator
from qs_core.utils.matrix_builder import build_matrix, get_matrix_query, resolve_conflicts
from qs_core.utils.variable_resolver import VariableResolver


@pytest.fixture
def messages():
    return []

# ----------------------------
# resolve_conflicts
# ----------------------------

def test_eq_and_ne_are_deduplicated_with_one_message(messages):
    accumulator = FieldAccumulator(eq=[1, 2, 1], ne=['a', 'a'])
    assert resolve_conflicts('x', accumulator, messages)
    assert accumulator.eq == [1, 2]
    assert accumulator.ne == ['a']
    assert messages == ['one or more value item removed due to duplicated for x']

def test_gt_dropped_when_not_above_gte(messages):
    accumulator = FieldAccumulator(gt=5, gte=5)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'gte': 5}
    assert messages == ['both > and >= exist, keep the max one for x']

def test_gt_kept_when_above_gte(messages):
    accumulator = FieldAccumulator(gt=9, gte=5)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'gt': 9, 'gte': 5}
    assert messages == []

def test_lt_dropped_when_lte_not_above(messages):
    accumulator = FieldAccumulator(lte=3, lt=8)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'lte': 3}
    assert messages == ['both < and <= exist, keep the min one for x']

def test_lt_kept_when_below_lte(messages):
    # the comparison mirrors the gt / gte one literally: lte <= lt drops lt
    accumulator = FieldAccumulator(lte=8, lt=3)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'lte': 8, 'lt': 3}
    assert messages == []

def test_zero_bounds_take_part(messages):
    accumulator = FieldAccumulator(gt=0, gte=0)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'gte': 0}

def test_incomparable_bounds_are_kept(messages):
    accumulator = FieldAccumulator(gt='a', gte=1)
    resolve_conflicts('x', accumulator, messages)
    assert accumulator.to_query() == {'gt': 'a', 'gte': 1}

def test_field_without_value_is_dropped(messages):
    assert not resolve_conflicts('x', FieldAccumulator(eq=[]), messages)
    assert messages == ['skipped, due no value for x']

# ----------------------------
# build_matrix
# ----------------------------

def test_build_matrix_sort(messages):
    name_values = {'x': FieldAccumulator(eq=[1]), 'sort': FieldAccumulator(eq=['x', 'y', -1])}
    matrix = build_matrix(name_values, VariableResolver(), {}, messages)
    assert get_matrix_query(matrix) == {'x': {'eq': [1]}, 'sort': {'eq': ['x', 1, 'y', -1]}}

def test_build_matrix_drops_empty_sort(messages):
    name_values = {'sort': FieldAccumulator(eq=[1, -1])}
    matrix = build_matrix(name_values, VariableResolver(), {}, messages)
    assert matrix == {}
    assert messages == ['skipped, unexpected 1', 'skipped, unexpected -1', 'skipped, due no value for sort']

def test_build_matrix_drops_empty_field(messages):
    name_values = {'x': FieldAccumulator(eq=[]), 'y': FieldAccumulator(ne=[2])}
    matrix = build_matrix(name_values, None, None, messages)
    assert get_matrix_query(matrix) == {'y': {'ne': [2]}}
    assert messages == ['skipped, due no value for x']
