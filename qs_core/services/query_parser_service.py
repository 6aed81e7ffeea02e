import logging
from typing import Any, Dict, List, Mapping, Optional

from qs_core.constants.app_constants import AppConstants
from qs_core.constants.app_message import AppMessage
from qs_core.model.query_model import ParseResult
from qs_core.utils.query_parser import parse_query
from qs_core.utils.variable_resolver import GetVariables, TransformName, VariablesTemplate

logger = logging.getLogger(__name__)


class QueryStringError(Exception):
    """Raised when a caller treats query string diagnostics as client errors."""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__(f"{AppMessage.PARSE_FAILED}: {'; '.join(self.messages)}")


def raise_for_messages(result: ParseResult) -> ParseResult:
    if result.has_messages:
        raise QueryStringError(result.messages)
    return result


class QueryParserService:
    """Parses query strings against one schema and one default configuration."""

    def __init__(self,
                 variables_template: Optional[VariablesTemplate] = None,
                 get_variables: Optional[GetVariables] = None,
                 transform_name: Optional[TransformName] = None,
                 cfg: Optional[Dict[str, Any]] = None,
                 page_size_fallback: Any = AppConstants.PAGE_SIZE_FALLBACK):
        self.variables_template = variables_template
        self.get_variables = get_variables
        self.transform_name = transform_name
        self.cfg = cfg or {}
        self.page_size_fallback = page_size_fallback
        logger.info(f"Initialized QueryParserService with {len(variables_template or {})} template variable(s)")

    def parse(self, query_vars: Optional[Mapping[str, Any]], cfg: Optional[Dict[str, Any]] = None,
              strict: bool = False) -> ParseResult:
        """
        Parse one request's query variables.

        Args:
            query_vars: raw key to value mapping from the HTTP layer
            cfg: replaces the service configuration for this call
            strict: raise QueryStringError when any diagnostic was produced

        Returns:
            ParseResult with the filter, the pagination and the diagnostics
        """
        messages = []
        try:
            result = parse_query(
                query_vars,
                cfg if cfg is not None else dict(self.cfg),
                self.variables_template,
                self.get_variables,
                self.transform_name,
                messages,
                page_size_fallback=self.page_size_fallback,
            )
        except Exception as e:
            logger.error(f"Error parsing query string: {str(e)}", exc_info=True)
            raise

        parsed = ParseResult.from_result(result, messages)
        if parsed.has_messages:
            logger.warning(f"Query string parsed with diagnostics: {parsed.messages}")
        if strict:
            raise_for_messages(parsed)
        return parsed
