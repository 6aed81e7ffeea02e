from typing import Any, Dict, List, Optional, Sequence

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.utils.variable_resolver import VariableResolver, add_message, parse_number


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return parse_number(value)
    return None


def parse_sort_array(values: Sequence[Any], resolver: Optional[VariableResolver],
                     cfg: Dict[str, Any], messages: Optional[List[str]]) -> List[Any]:
    """
    Reads sort tokens as field names, each optionally followed by 1 or -1.

    A field without a direction sorts ascending. Numbers anywhere but right
    after a field are dropped, and so are fields the schema does not know
    when the resolver can check them.

    Returns:
        alternating field, direction values
    """
    result = []
    expect_direction = False
    for value in values:
        number = _as_number(value)
        blank = isinstance(value, str) and not value.strip()
        if value is None or blank or number is not None:
            if expect_direction and number in (AppConstants.ASC, AppConstants.DESC):
                result.append(int(number))
                expect_direction = False
            else:
                add_message(messages, AppMessage.UNEXPECTED_SORT_TOKEN.format(value=value))
            continue
        if expect_direction:
            result.append(AppConstants.ASC)
            expect_direction = False
        if resolver is not None and resolver.validates_sort:
            full_name = resolver.normalize_name(value, cfg)
            if resolver.allows_sort_field(full_name, cfg):
                result.append(full_name)
                expect_direction = True
            else:
                add_message(messages, AppMessage.SORT_NOT_ALLOWED.format(value=value))
        else:
            result.append(value)
            expect_direction = True
    if expect_direction:
        result.append(AppConstants.ASC)
    return result


def sort_array_to_mapping(values: Sequence[Any]) -> Dict[Any, Any]:
    """['x', 1, 'y', -1] -> {'x': 1, 'y': -1}"""
    sort = {}
    for i in range(0, len(values), 2):
        sort[values[i]] = values[i + 1] if i + 1 < len(values) else None
    return sort
