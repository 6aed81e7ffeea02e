from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from qs_core.constants.app_constants import AppConstants


class Operator(str, Enum):
    """Supported filter operators, declared in slot order"""
    EQ = AppConstants.OP_EQ
    NE = AppConstants.OP_NE
    BT = AppConstants.OP_BT
    GT = AppConstants.OP_GT
    GTE = AppConstants.OP_GTE
    LTE = AppConstants.OP_LTE
    LT = AppConstants.OP_LT
    REGEX = AppConstants.OP_REGEX

    @property
    def is_scalar(self) -> bool:
        return self.value in AppConstants.SCALAR_OPERATORS

    @property
    def keeps_max(self) -> bool:
        return self.value in AppConstants.MAX_OPERATORS

    @classmethod
    def from_name(cls, name: Any) -> Optional['Operator']:
        """Returns the operator for a name like 'gte', or None when unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


class VariableDescriptor(BaseModel):
    """Schema metadata for one query field."""
    model_config = ConfigDict(extra='allow', arbitrary_types_allowed=True)

    transfn: Any = Field(None, description="Value coercion function, used only when callable")
    default: Any = Field(None, description="Value injected when the field is missing from the request")
    default_op: Optional[str] = Field(None, description="Operator name for the default, eq when unset")
    read_only: bool = Field(False, description="Field may not be filtered on")

    @property
    def has_default(self) -> bool:
        return 'default' in self.model_fields_set

    @property
    def coercion(self):
        return self.transfn if callable(self.transfn) else None

    @classmethod
    def from_value(cls, value: Any) -> 'VariableDescriptor':
        """
        Builds a descriptor from whatever a schema lookup returned.

        Args:
            value: a VariableDescriptor, a mapping of descriptor fields, an
                object carrying them as attributes, or any other truthy value
                (treated as a descriptor without metadata)
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        if isinstance(value, (bool, int, float, str, bytes, list, tuple, set)):
            return cls()
        return cls.model_validate(value, from_attributes=True)


class FieldAccumulator(BaseModel):
    """
    Per-field storage of coerced values, one attribute per operator.

    eq, ne, bt and regex collect lists of values; gt and gte hold the running
    maximum, lte and lt the running minimum.
    """
    eq: Optional[List[Any]] = None
    ne: Optional[List[Any]] = None
    bt: Optional[List[Any]] = None
    gt: Any = None
    gte: Any = None
    lte: Any = None
    lt: Any = None
    regex: Optional[List[Any]] = None

    def get(self, op: Operator) -> Any:
        return getattr(self, op.value)

    def set(self, op: Operator, value: Any) -> None:
        setattr(self, op.value, value)

    def clear(self, op: Operator) -> None:
        setattr(self, op.value, None)

    def has(self, op: Operator) -> bool:
        value = self.get(op)
        if value is None:
            return False
        if not op.is_scalar:
            return len(value) > 0
        return True

    def is_empty(self) -> bool:
        return not any(self.has(op) for op in Operator)

    def to_query(self) -> Dict[str, Any]:
        """Operator name to value, for the non-empty slots only."""
        return {op.value: self.get(op) for op in Operator if self.has(op)}


class Pagination(BaseModel):
    page_no: Any = None
    page_size: Any = None
    sort: Optional[Dict[Any, Any]] = None
    sort_default: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ParseResult(BaseModel):
    """Outcome of one query string parse"""
    query: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    pagination: Optional[Pagination] = None
    messages: List[str] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict, description="Configuration passed through")

    @property
    def has_messages(self) -> bool:
        return len(self.messages) > 0

    @classmethod
    def from_result(cls, result: Dict[str, Any], messages: List[str]) -> 'ParseResult':
        pagination = result.get(AppConstants.PAGINATION)
        extras = {k: v for k, v in result.items()
                  if k not in (AppConstants.QUERY, AppConstants.PAGINATION)}
        return cls(
            query=result.get(AppConstants.QUERY) or {},
            pagination=Pagination(**pagination) if pagination is not None else None,
            messages=list(messages),
            extras=extras,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {AppConstants.QUERY: self.query, **self.extras}
        if self.pagination is not None:
            result[AppConstants.PAGINATION] = self.pagination.to_dict()
        return result
