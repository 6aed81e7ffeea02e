class AppConstants:
    # operator names, order is the slot order of a field accumulator
    OP_EQ = 'eq'
    OP_NE = 'ne'
    OP_BT = 'bt'
    OP_GT = 'gt'
    OP_GTE = 'gte'
    OP_LTE = 'lte'
    OP_LT = 'lt'
    OP_REGEX = 'regex'
    OPERATORS = (OP_EQ, OP_NE, OP_BT, OP_GT, OP_GTE, OP_LTE, OP_LT, OP_REGEX)

    # single value slots, combined with max() / min()
    MAX_OPERATORS = (OP_GT, OP_GTE)
    MIN_OPERATORS = (OP_LTE, OP_LT)
    SCALAR_OPERATORS = MAX_OPERATORS + MIN_OPERATORS

    # pagination
    SORT = 'sort'
    PAGE_NO = 'page_no'
    PAGE_SIZE = 'page_size'
    PAGINATION = 'pagination'
    SORT_DEFAULT = 'sort_default'
    PAGINATION_KEYS = (SORT, PAGE_NO, PAGE_SIZE)
    PAGE_KEYS = (PAGE_NO, PAGE_SIZE)
    PAGE_SIZE_FALLBACK = 1

    # result
    QUERY = 'query'

    # raw query string
    PIPE = '|'
    NULL_VALUES = ('null', 'NULL')
    BETWEEN_MARK = '<>'
    GT_MARK = '>'
    LT_MARK = '<'
    SUFFIX_OPERATORS = {
        '!': OP_NE,
        '<': OP_LTE,
        '>': OP_GTE,
        '$': OP_REGEX,
    }

    # sort directions
    ASC = 1
    DESC = -1

    # environment
    ENV_PAGE_NO = 'QS_PAGE_NO'
    ENV_PAGE_SIZE = 'QS_PAGE_SIZE'
    ENV_SORT = 'QS_SORT'
    ENV_PAGE_SIZE_FALLBACK = 'QS_PAGE_SIZE_FALLBACK'
