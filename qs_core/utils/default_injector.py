import logging
from typing import Any, Dict, List, Mapping, Optional, Set

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.model.query_model import FieldAccumulator, Operator, VariableDescriptor
from qs_core.utils.value_transformer import NameValues
from qs_core.utils.variable_resolver import add_message

logger = logging.getLogger(__name__)


def _is_object(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple, set))


def sort_mapping_to_array(sort: Mapping[str, Any]) -> List[Any]:
    """{'x': 1, 'y': -1} -> ['x', 1, 'y', -1], in the mapping's insertion order."""
    values = []
    for field, direction in sort.items():
        values.extend((field, direction))
    return values


def get_default_values(name_values: NameValues, name: str, variable: VariableDescriptor,
                       messages: Optional[List[str]]) -> bool:
    """
    Writes a variable's default into name_values as if it came from the request.

    Acceptable defaults:
        {'default': 'x'}
        {'default': 100, 'default_op': 'gt'}
        {'default': ['x', 'y'], 'default_op': 'eq'}
        {'default': [1, 100], 'default_op': 'bt'}
        {'default': {'x': 1, 'y': -1}}     sort only
        {'default': ['x', 1, 'y', -1]}     sort too

    Returns:
        False when the default was rejected (a diagnostic is added to messages)
    """
    op_name = variable.default_op or AppConstants.OP_EQ
    if name in AppConstants.PAGINATION_KEYS and op_name != AppConstants.OP_EQ:
        add_message(messages, AppMessage.WRONG_DEFAULT_PAGINATION_OP)
        return False
    op = Operator.from_name(op_name)
    if op is None:
        add_message(messages, AppMessage.NOT_SUPPORTED_OP.format(op=op_name))
        return False

    default = variable.default
    accumulator = FieldAccumulator()
    if op.is_scalar:
        if isinstance(default, (list, tuple)):
            accumulator.set(op, default[0] if default else None)
            add_message(messages, AppMessage.DEFAULT_FIRST_ONLY.format(name=name))
        else:
            accumulator.set(op, default)
        name_values[name] = accumulator
        return True

    if isinstance(default, (list, tuple)):
        if any(_is_object(value) for value in default):
            add_message(messages, AppMessage.WRONG_DEFAULT_ITEM_OBJECT)
            return False
        values = list(default)
    elif isinstance(default, Mapping):
        if op != Operator.EQ or name != AppConstants.SORT:
            add_message(messages, AppMessage.WRONG_DEFAULT_OBJECT)
            return False
        values = sort_mapping_to_array(default)
    else:
        values = [default]
    accumulator.set(op, values)
    name_values[name] = accumulator
    return True


def _config_override(cfg: Dict[str, Any], name: str) -> Any:
    pagination = cfg.get(AppConstants.PAGINATION)
    if name in AppConstants.PAGINATION_KEYS and isinstance(pagination, Mapping) and pagination.get(name):
        return pagination[name]
    return cfg.get(name)


def inject_defaults(name_values: NameValues, variables_template: Optional[Mapping[str, Any]],
                    cfg: Dict[str, Any], messages: Optional[List[str]]) -> Set[str]:
    """
    Fills in schema defaults for the fields the request did not mention.

    A truthy cfg[name] replaces the schema default: scalars become
    {'default': value}, mappings are used as the variable itself. Pagination
    keys found in cfg are already in parsed form and get no default here.

    Returns:
        the names that received a default
    """
    defaulted = set()
    if not variables_template:
        return defaulted
    for name, template in variables_template.items():
        if name in name_values or template is None:
            continue
        variable = VariableDescriptor.from_value(template)
        if not variable.has_default:
            continue
        override = _config_override(cfg, name)
        if override:
            if name in AppConstants.PAGINATION_KEYS:
                continue
            if isinstance(override, Mapping):
                variable = VariableDescriptor.from_value(dict(override))
            else:
                variable = VariableDescriptor(default=override)
        if get_default_values(name_values, name, variable, messages):
            logger.debug(f"default applied for {name}")
            defaulted.add(name)
    return defaulted
