from typing import Any, Callable, Dict, List, Optional

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.model.query_model import FieldAccumulator, Operator, VariableDescriptor
from qs_core.utils.variable_resolver import add_message, parse_number

NameValues = Dict[str, FieldAccumulator]


def default_transfn(value: Any) -> Any:
    """Numeric strings become numbers, other strings are trimmed, the rest passes through."""
    if isinstance(value, str):
        number = parse_number(value)
        if number is not None:
            return number
        return value.strip()
    return value


def _coerce(transfn: Callable[[Any], Any], value: Any) -> Any:
    # None is the parsed form of 'null' and is kept as is
    if value is None:
        return None
    return transfn(value)


def split_values(value: Any, op: Operator, transfn: Callable[[Any], Any]) -> List[Any]:
    """
    Expands a raw value into the list of coerced values it carries.

    Lists are flattened with every pipe delimited item split; a plain string
    is split on pipes too, except for regex where the pipe is an alternation.
    """
    if isinstance(value, (list, tuple)):
        values = []
        for part in value:
            if isinstance(part, str) and AppConstants.PIPE in part:
                values.extend(_coerce(transfn, item) for item in part.split(AppConstants.PIPE))
            else:
                values.append(_coerce(transfn, part))
        return values
    if op != Operator.REGEX and isinstance(value, str) and AppConstants.PIPE in value:
        return [_coerce(transfn, item.strip()) for item in value.split(AppConstants.PIPE)]
    if isinstance(value, str):
        value = value.strip()
    return [_coerce(transfn, value)]


def _combine(op: Operator, values: List[Any]) -> Any:
    return max(values) if op.keeps_max else min(values)


def transform_value(variable: VariableDescriptor, name: str, value: Any, op: Operator,
                    name_values: NameValues, messages: Optional[List[str]] = None) -> bool:
    """
    Coerces a raw value and accumulates it into the field's slot for op.

    List slots append every value; scalar slots keep the max (gt, gte) or the
    min (lte, lt) of what they held and the new values.

    Returns:
        False when nothing was accumulated
    """
    transfn = variable.coercion or default_transfn
    values = split_values(value, op, transfn)
    if not values:
        return False

    accumulator = name_values.setdefault(name, FieldAccumulator())
    current = accumulator.get(op)
    if not op.is_scalar:
        if current is None:
            accumulator.set(op, values)
        else:
            current.extend(values)
        return True

    candidates = values if current is None else [current] + values
    try:
        accumulator.set(op, candidates[0] if len(candidates) == 1 else _combine(op, candidates))
    except TypeError:
        add_message(messages, AppMessage.INCOMPARABLE.format(name=name))
        if current is None:
            return False
    return True
