import logging
from typing import Any, Dict, List, Mapping, Optional

from qs_core.constants.app_constants import AppConstants
from qs_core.model.query_model import Pagination
from qs_core.utils.default_injector import inject_defaults
from qs_core.utils.key_tokenizer import get_name_value_op
from qs_core.utils.matrix_builder import build_matrix, get_matrix_query
from qs_core.utils.sort_parser import sort_array_to_mapping
from qs_core.utils.value_transformer import transform_value
from qs_core.utils.variable_resolver import GetVariables, TransformName, VariableResolver, VariablesTemplate

"""
================================================================================
Query String Parser – Usage Guide
================================================================================
Purpose:
    Turns the flat key / value mapping of a parsed query string into a filter
    object plus an optional pagination directive.

-------------------------------------------------------------------------------
1. OPERATORS
-------------------------------------------------------------------------------
    x=abc          → {'x': {'eq': ['abc']}}
    x=a|b          → {'x': {'eq': ['a', 'b']}}
    x!=1           → {'x': {'ne': [1]}}
    x<>1|9         → {'x': {'bt': [1, 9]}}
    x>5            → {'x': {'gt': 5}}
    x>=5           → {'x': {'gte': 5}}
    x<5            → {'x': {'lt': 5}}
    x<=5           → {'x': {'lte': 5}}
    x$=^ab.*       → {'x': {'regex': ['^ab.*']}}

    The HTTP layer hands '>=' over as key 'x>' with value '5', and '>' as key
    'x>5' with an empty value; both forms are understood.

-------------------------------------------------------------------------------
2. PAGINATION
-------------------------------------------------------------------------------
    page_no=2&page_size=20&sort=price|-1|name
        → {'page_no': 2, 'page_size': 20,
           'sort': {'price': -1, 'name': 1}, 'sort_default': False}

-------------------------------------------------------------------------------
3. SCHEMA
-------------------------------------------------------------------------------
    variables_template = {
        'price': {'transfn': float},
        'status': {'default': 'active'},
        'owner': {'read_only': True},
        'sort': {'default': {'created_at': -1}},
    }

    Unknown fields are skipped with a diagnostic once a schema is given.
================================================================================
"""

logger = logging.getLogger(__name__)


def get_query(matrix_query: Dict[str, Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """The filter part of the matrix query, without the pagination keys."""
    return {name: value for name, value in matrix_query.items()
            if name not in AppConstants.PAGINATION_KEYS}


def _eq_values(matrix_query: Dict[str, Dict[str, Any]], name: str) -> List[Any]:
    return (matrix_query.get(name) or {}).get(AppConstants.OP_EQ) or []


def _config_value(cfg: Dict[str, Any], name: str) -> Any:
    pagination = cfg.get(AppConstants.PAGINATION)
    if isinstance(pagination, Mapping) and pagination.get(name) is not None:
        return pagination[name]
    return cfg.get(name)


def _config_sort(sort: Any) -> Optional[Dict[Any, Any]]:
    if isinstance(sort, Mapping):
        return dict(sort)
    if isinstance(sort, (list, tuple)):
        return sort_array_to_mapping(sort)
    return None


def get_pagination(matrix_query: Dict[str, Dict[str, Any]], cfg: Dict[str, Any],
                   sort_defaulted: bool = False,
                   page_size_fallback: Any = AppConstants.PAGE_SIZE_FALLBACK) -> Optional[Dict[str, Any]]:
    """
    Builds the pagination directive.

    Page keys are emitted when the request carries one of them, taking the
    last value given, else the configured one. When cfg has a pagination
    section without that key, page_size_fallback fills the gap.

    The sort comes from the request (or a schema default), else from cfg.
    sort_default is False only for a sort the request supplied.

    Returns:
        None when there is neither a page key nor a sort
    """
    has_page_key = any(_eq_values(matrix_query, name) for name in AppConstants.PAGE_KEYS)
    sort_values = _eq_values(matrix_query, AppConstants.SORT)
    config_sort = _config_sort(_config_value(cfg, AppConstants.SORT))
    if not has_page_key and not sort_values and not config_sort:
        return None

    pagination = {}
    if has_page_key:
        has_section = isinstance(cfg.get(AppConstants.PAGINATION), Mapping)
        for name in AppConstants.PAGE_KEYS:
            values = _eq_values(matrix_query, name)
            if values:
                pagination[name] = values[-1]
            elif _config_value(cfg, name) is not None:
                pagination[name] = _config_value(cfg, name)
            elif has_section:
                pagination[name] = page_size_fallback

    if sort_values:
        pagination[AppConstants.SORT] = sort_array_to_mapping(sort_values)
        pagination[AppConstants.SORT_DEFAULT] = sort_defaulted
    elif config_sort:
        pagination[AppConstants.SORT] = config_sort
        pagination[AppConstants.SORT_DEFAULT] = True
    return Pagination(**pagination).to_dict()


def parse_query(query_vars: Optional[Mapping[str, Any]],
                cfg: Optional[Dict[str, Any]] = None,
                variables_template: Optional[VariablesTemplate] = None,
                get_variables: Optional[GetVariables] = None,
                transform_name: Optional[TransformName] = None,
                messages: Optional[List[str]] = None,
                page_size_fallback: Any = AppConstants.PAGE_SIZE_FALLBACK) -> Dict[str, Any]:
    """
    Compiles query string variables into {'query': ..., **cfg, 'pagination': ...}.

    Args:
        query_vars: raw key to value (string, list of strings or empty)
        cfg: passed through into the result, also the source of pagination
            defaults and of per-field default overrides
        variables_template: field name to descriptor; the schema lookup when
            get_variables is not given, and the source of defaults
        get_variables: (name, cfg) -> descriptor or None
        transform_name: (name, cfg) -> name, applied before any lookup
        messages: diagnostics are appended here, nothing recoverable raises
        page_size_fallback: page value used when cfg has a pagination section
            without that key

    Returns:
        the result mapping; 'pagination' is present only when there is a page
        key or a sort
    """
    cfg = cfg or {}
    if messages is None:
        messages = []
    resolver = VariableResolver(variables_template, get_variables, transform_name)

    name_values = {}
    for key, raw_value in (query_vars or {}).items():
        name, value, op = get_name_value_op(key, raw_value)
        name = resolver.normalize_name(name, cfg)
        variable = resolver.validate(name, op, cfg, messages)
        if variable is not None:
            transform_value(variable, name, value, op, name_values, messages)

    defaulted = inject_defaults(name_values, variables_template, cfg, messages)
    matrix = build_matrix(name_values, resolver, cfg, messages)
    matrix_query = get_matrix_query(matrix)

    result = {AppConstants.QUERY: get_query(matrix_query), **cfg}
    pagination = get_pagination(matrix_query, cfg,
                                sort_defaulted=AppConstants.SORT in defaulted,
                                page_size_fallback=page_size_fallback)
    if pagination is not None:
        result[AppConstants.PAGINATION] = pagination
    else:
        result.pop(AppConstants.PAGINATION, None)
    if messages:
        logger.debug(f"query string parsed with {len(messages)} diagnostic(s)")
    return result
