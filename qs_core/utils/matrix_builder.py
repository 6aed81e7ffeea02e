import logging
from typing import Any, Dict, List, Optional

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.model.query_model import FieldAccumulator, Operator
from qs_core.utils.sort_parser import parse_sort_array
from qs_core.utils.value_transformer import NameValues
from qs_core.utils.variable_resolver import VariableResolver, add_message

logger = logging.getLogger(__name__)


def _unique(values: List[Any]) -> List[Any]:
    unique = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique


def _not_above(lower: Any, upper: Any) -> bool:
    try:
        return lower <= upper
    except TypeError:
        return False


def resolve_conflicts(name: str, accumulator: FieldAccumulator, messages: Optional[List[str]]) -> bool:
    """
    Removes duplicated eq / ne values and redundant range bounds.

    gt is dropped when gt <= gte, lt is dropped when lte <= lt.

    Returns:
        False when the field has no value left
    """
    removed = False
    for op in (Operator.EQ, Operator.NE):
        values = accumulator.get(op)
        if values:
            unique = _unique(values)
            removed = removed or len(unique) < len(values)
            accumulator.set(op, unique)
    if removed:
        add_message(messages, AppMessage.DUPLICATED_REMOVED.format(name=name))

    if accumulator.has(Operator.GT) and accumulator.has(Operator.GTE) \
            and _not_above(accumulator.gt, accumulator.gte):
        accumulator.clear(Operator.GT)
        add_message(messages, AppMessage.KEEP_MAX.format(name=name))
    if accumulator.has(Operator.LTE) and accumulator.has(Operator.LT) \
            and _not_above(accumulator.lte, accumulator.lt):
        accumulator.clear(Operator.LT)
        add_message(messages, AppMessage.KEEP_MIN.format(name=name))

    if accumulator.is_empty():
        add_message(messages, AppMessage.NO_VALUE.format(name=name))
        return False
    return True


def _build_sort(accumulator: FieldAccumulator, resolver: Optional[VariableResolver],
                cfg: Dict[str, Any], messages: Optional[List[str]]) -> Optional[FieldAccumulator]:
    values = parse_sort_array(accumulator.eq, resolver, cfg, messages)
    if not values:
        add_message(messages, AppMessage.NO_SORT_VALUE)
        return None
    return FieldAccumulator(eq=values)


def build_matrix(name_values: NameValues, resolver: Optional[VariableResolver] = None,
                 cfg: Optional[Dict[str, Any]] = None,
                 messages: Optional[List[str]] = None) -> Dict[str, FieldAccumulator]:
    """Resolves every accumulated field, dropping the ones left without a value."""
    cfg = cfg or {}
    matrix = {}
    for name, accumulator in name_values.items():
        if name == AppConstants.SORT and accumulator.eq:
            sort = _build_sort(accumulator, resolver, cfg, messages)
            if sort is not None:
                matrix[name] = sort
        elif resolve_conflicts(name, accumulator, messages):
            matrix[name] = accumulator
    logger.debug(f"matrix built for fields: {list(matrix)}")
    return matrix


def get_matrix_query(matrix: Dict[str, FieldAccumulator]) -> Dict[str, Dict[str, Any]]:
    """Field name to {operator: value}, leaving out fields without any value."""
    matrix_query = {}
    for name, accumulator in matrix.items():
        value = accumulator.to_query()
        if value:
            matrix_query[name] = value
    return matrix_query
