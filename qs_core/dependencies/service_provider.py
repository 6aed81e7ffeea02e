from qs_core.dependencies.config_provider import get_default_config, get_page_size_fallback
from qs_core.services.query_parser_service import QueryParserService

__query_parser_service = None


def get_query_parser_service() -> QueryParserService:
    """Dependency provider for QueryParserService (singleton)"""
    global __query_parser_service

    if __query_parser_service is None:
        __query_parser_service = QueryParserService(
            cfg=get_default_config(),
            page_size_fallback=get_page_size_fallback(),
        )

    return __query_parser_service


def reset_query_parser_service() -> None:
    global __query_parser_service
    __query_parser_service = None
