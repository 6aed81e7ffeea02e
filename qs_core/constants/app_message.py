class AppMessage:
    INVALID_EMPTY_NAME = 'invalid empty name'
    VARIABLE_NOT_FOUND = 'skipped, variable not found {name}'
    READ_ONLY = 'skipped, readonly for {name}'
    PAGINATION_OP_EQ_ONLY = 'pagination key takes = operator only'

    WRONG_DEFAULT_PAGINATION_OP = 'wrong default in variable(1), pagination key takes eq operator only'
    NOT_SUPPORTED_OP = 'not supported op: {op}'
    DEFAULT_FIRST_ONLY = 'use default[0] only for {name}'
    WRONG_DEFAULT_ITEM_OBJECT = 'wrong default in variable(2), object type not allowed'
    WRONG_DEFAULT_OBJECT = 'wrong default in variable(3), object type not allowed'

    DUPLICATED_REMOVED = 'one or more value item removed due to duplicated for {name}'
    KEEP_MAX = 'both > and >= exist, keep the max one for {name}'
    KEEP_MIN = 'both < and <= exist, keep the min one for {name}'
    NO_VALUE = 'skipped, due no value for {name}'
    INCOMPARABLE = 'skipped, incomparable values for {name}'

    UNEXPECTED_SORT_TOKEN = 'skipped, unexpected {value}'
    SORT_NOT_ALLOWED = 'skipped, sort by field not allowed: {value}'
    NO_SORT_VALUE = 'skipped, due no value for sort'

    PARSE_FAILED = 'query string rejected'
