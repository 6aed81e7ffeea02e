from typing import Any, Tuple

from qs_core.constants.app_constants import AppConstants
from qs_core.model.query_model import Operator


def _split_key(key: str, value: Any) -> Tuple[str, Any, Operator]:
    # the operator and the value are both encoded in the key, e.g. 'price>100'
    op = Operator.EQ
    parts = None
    if AppConstants.BETWEEN_MARK in key:
        op = Operator.BT
        parts = key.split(AppConstants.BETWEEN_MARK)
    elif AppConstants.GT_MARK in key:
        op = Operator.GT
        parts = key.split(AppConstants.GT_MARK)
    elif AppConstants.LT_MARK in key:
        op = Operator.LT
        parts = key.split(AppConstants.LT_MARK)
    if parts is not None and len(parts) == 2:
        return parts[0], parts[1].strip(), op
    return key, value, op


def get_name_value_op(key: str, value: Any) -> Tuple[str, Any, Operator]:
    """
    Tokenizes one raw query string pair.

    With an empty value the operator and the value are read from the key
    ('x<>1|9', 'x>5', 'x<5'); otherwise a trailing marker on the key selects
    the operator ('x!', 'x<', 'x>', 'x$'). Anything else is an eq on the key.

    Returns:
        (name, value, operator); 'null' / 'NULL' values come back as None
    """
    name = key
    op = Operator.EQ
    if not value:
        name, value, op = _split_key(key, value)
    elif key and key[-1] in AppConstants.SUFFIX_OPERATORS:
        op = Operator(AppConstants.SUFFIX_OPERATORS[key[-1]])
        name = key[:-1]

    if isinstance(value, str) and value in AppConstants.NULL_VALUES:
        value = None
    return name, value, op
