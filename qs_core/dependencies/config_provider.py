import os
from typing import Any, Dict

from dotenv import load_dotenv

from qs_core.constants.app_constants import AppConstants
from qs_core.model.query_model import Operator
from qs_core.utils.sort_parser import parse_sort_array, sort_array_to_mapping
from qs_core.utils.value_transformer import default_transfn, split_values
from qs_core.utils.variable_resolver import to_number

load_dotenv()


def get_page_size_fallback() -> Any:
    value = os.getenv(AppConstants.ENV_PAGE_SIZE_FALLBACK)
    if not value:
        return AppConstants.PAGE_SIZE_FALLBACK
    number = to_number(value)
    return AppConstants.PAGE_SIZE_FALLBACK if number is None else number


def get_default_config() -> Dict[str, Any]:
    """
    Pagination defaults from the environment, in the parsed form cfg expects.

    QS_PAGE_NO=1, QS_PAGE_SIZE=20 and QS_SORT=created_at|-1 give
    {'pagination': {'page_no': 1, 'page_size': 20, 'sort': {'created_at': -1}}}
    """
    pagination = {}
    for name, env_name in ((AppConstants.PAGE_NO, AppConstants.ENV_PAGE_NO),
                           (AppConstants.PAGE_SIZE, AppConstants.ENV_PAGE_SIZE)):
        number = to_number(os.getenv(env_name) or '')
        if number is not None:
            pagination[name] = number

    sort = os.getenv(AppConstants.ENV_SORT)
    if sort:
        values = parse_sort_array(split_values(sort, Operator.EQ, default_transfn), None, {}, None)
        if values:
            pagination[AppConstants.SORT] = sort_array_to_mapping(values)

    if not pagination:
        return {}
    return {AppConstants.PAGINATION: pagination}
