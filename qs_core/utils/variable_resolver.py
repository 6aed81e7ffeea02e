import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.model.query_model import Operator, VariableDescriptor

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

VariablesTemplate = Dict[str, Union[VariableDescriptor, Dict[str, Any]]]
GetVariables = Callable[[str, Dict[str, Any]], Any]
TransformName = Callable[[str, Dict[str, Any]], str]


def parse_number(value: str) -> Optional[Union[int, float]]:
    """Returns the number a string spells, or None when it is not numeric."""
    text = value.strip()
    if not NUMBER_PATTERN.match(text):
        return None
    if '.' in text or 'e' in text or 'E' in text:
        return float(text)
    return int(text)


def to_number(value: Any) -> Any:
    """Numeric coercion for page_no / page_size when the schema has no entry for them."""
    if isinstance(value, str):
        return parse_number(value)
    return value


def is_found(variable: Any) -> bool:
    # an empty mapping is still a schema entry
    return isinstance(variable, Mapping) or bool(variable)


def add_message(messages: Optional[List[str]], message: str) -> None:
    logger.debug(f"query string diagnostic: {message}")
    if messages is not None:
        messages.append(message)


class VariableResolver:
    """
    Schema lookup and name normalization for query fields.

    Both collaborators are optional. Without a lookup every field is accepted
    (permissive mode); without a name transform names are used as they come.
    A variables template stands in for the lookup when no explicit
    get_variables is given.
    """

    def __init__(self,
                 variables_template: Optional[VariablesTemplate] = None,
                 get_variables: Optional[GetVariables] = None,
                 transform_name: Optional[TransformName] = None):
        self.variables_template = variables_template
        self._get_variables = get_variables
        self._transform_name = transform_name
        if self._get_variables is None and variables_template is not None:
            self._get_variables = lambda name, cfg: variables_template.get(name)

    @property
    def permissive(self) -> bool:
        return self._get_variables is None

    @property
    def validates_sort(self) -> bool:
        # sort fields are checked only when names can be normalized and looked up
        return self._get_variables is not None and self._transform_name is not None

    def normalize_name(self, name: str, cfg: Dict[str, Any]) -> str:
        if self._transform_name is None:
            return name
        return self._transform_name(name, cfg)

    def lookup(self, name: str, cfg: Dict[str, Any]) -> Any:
        if self._get_variables is None:
            return None
        return self._get_variables(name, cfg)

    def validate(self, name: str, op: Operator, cfg: Dict[str, Any],
                 messages: Optional[List[str]]) -> Optional[VariableDescriptor]:
        """
        Checks a field name and operator against the schema.

        Returns:
            the descriptor to transform values with, or None when the field is
            rejected (a diagnostic is added to messages)
        """
        if not name:
            add_message(messages, AppMessage.INVALID_EMPTY_NAME)
            return None
        if self.permissive:
            return VariableDescriptor()

        variable = self.lookup(name, cfg)
        if not is_found(variable):
            if name == AppConstants.SORT:
                return VariableDescriptor()
            if name in AppConstants.PAGE_KEYS:
                return VariableDescriptor(transfn=to_number)
            add_message(messages, AppMessage.VARIABLE_NOT_FOUND.format(name=name))
            return None

        variable = VariableDescriptor.from_value(variable)
        if variable.read_only:
            add_message(messages, AppMessage.READ_ONLY.format(name=name))
            return None
        if name in AppConstants.PAGINATION_KEYS and op != Operator.EQ:
            add_message(messages, AppMessage.PAGINATION_OP_EQ_ONLY)
            return None
        return variable

    def allows_sort_field(self, name: str, cfg: Dict[str, Any]) -> bool:
        return is_found(self.lookup(name, cfg))
