"""
Search/detail orchestration.

SearchOrchestrator is the state machine behind the recipe finder screen. It owns one
SessionState and is driven by discrete user events:

- set_mode, set_query_text, close_detail, toggle_show_favorites: synchronous, no request
- submit_search, request_random, open_detail: coroutines that dispatch one connector call

Connector calls are blocking (requests), so they run in a worker thread via
asyncio.to_thread; awaiting that call is the only suspension point. Nothing here
locks: several requests may be in flight at once.

Request ordering:
    Each dispatch takes a token from its flow (search flow, detail/random flow).
    When a response resolves and its token is no longer the latest one for the flow,
    the response is discarded. The screen therefore always reflects the most recent
    user intent, whatever order responses arrive in. set_mode invalidates an
    in-flight search and close_detail invalidates an in-flight detail/random request.

Loading flag:
    is_loading is true while at least one dispatched request is unresolved. Every
    dispatch increments an in-flight counter and decrements it in a finally block,
    so no exit path can leave the flag stuck.

Error handling:
    Every connector failure is caught here and turned into error_message text.
    Nothing propagates to the rendering layer.
    error_message remembers which flow set it. A flow clears only its own error
    (or one nobody owns), so a detail request never wipes a resolved search's
    error. submit_search and set_mode clear any error.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar, Union

from recipes.connectors.base import BaseRecipeConnector
from recipes.errors import EmptyQueryError, NoResults
from recipes.models import RecipeDetail, RecipeSummary, SearchMode, SessionState

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_QUERY_MESSAGE = "Please enter a search term"
NO_RESULTS_MESSAGE = "No recipes found. Try a different search!"
SEARCH_FAILURE_PREFIX = "Something went wrong"
RANDOM_FAILURE_PREFIX = "Could not fetch random recipe"
DETAIL_FAILURE_PREFIX = "Could not load recipe details"

SEARCH_FLOW = "search"
DETAIL_FLOW = "detail"


def format_failure(prefix: str, error: BaseException) -> str:
    """
    Build user-facing failure text.

    Args:
        prefix: Fixed message for the operation (e.g., "Could not load recipe details")
        error: The caught exception; its message is appended when non-empty

    Returns:
        "prefix: details", or "prefix." when the exception carries no message
    """
    details = str(error).strip()
    if not details:
        return f"{prefix}."
    return f"{prefix}: {details}"


class SearchOrchestrator:
    """
    State machine over SessionState.

    Attributes:
        connector: Recipe service connector used for every request
        state: The SessionState rendered by the front end (read-only for it)
    """

    def __init__(self, connector: BaseRecipeConnector, state: Optional[SessionState] = None) -> None:
        self.connector = connector
        self.state = state if state is not None else SessionState()
        self._search_token = 0
        self._detail_token = 0
        self._in_flight = 0
        self._error_flow: Optional[str] = None

    # ------------------------------------------------------------------
    # Synchronous transitions
    # ------------------------------------------------------------------

    def set_mode(self, mode: Union[SearchMode, str]) -> None:
        """Switch search mode; clears results, error and the favorites view but keeps the query text."""
        self.state.mode = SearchMode(mode)
        self.state.results = []
        self._clear_error()
        self.state.showing_favorites = False
        # A search still in flight for the previous mode must not repopulate results
        self._search_token += 1

    def set_query_text(self, text: str) -> None:
        self.state.query_text = text

    def close_detail(self) -> None:
        self.state.selected_detail = None
        self._detail_token += 1

    def toggle_show_favorites(self) -> None:
        """Flip the favorites view. Results are kept; the renderer decides what to show."""
        self.state.showing_favorites = not self.state.showing_favorites

    # ------------------------------------------------------------------
    # Request transitions
    # ------------------------------------------------------------------

    async def submit_search(self, explicit_query: Optional[str] = None) -> None:
        """
        Run a search in the current mode.

        Args:
            explicit_query: Query to use instead of state.query_text (e.g. a category
                button). Not written back to query_text.

        In Random mode this delegates to request_random(). In the other modes an empty
        effective query sets "Please enter a search term" and no request is made.
        """
        if self.state.mode is SearchMode.RANDOM:
            await self.request_random()
            return

        try:
            query = self.resolve_query(explicit_query)
        except EmptyQueryError as e:
            self._set_error(SEARCH_FLOW, str(e))
            return

        mode = self.state.mode
        self._search_token += 1
        token = self._search_token

        self._clear_error()
        self.state.results = []
        logger.info("Search dispatched: mode=%s query=%r token=%d", mode.value, query, token)

        self._begin_request()
        try:
            try:
                results: List[RecipeSummary] = await self._dispatch(self.connector.search, mode, query)
            except NoResults:
                results = []
            except Exception as e:
                if self._is_current_search(token):
                    logger.warning("Search failed: mode=%s query=%r error=%s", mode.value, query, e)
                    self.state.results = []
                    self._set_error(SEARCH_FLOW, format_failure(SEARCH_FAILURE_PREFIX, e))
                return

            if not self._is_current_search(token):
                return

            if results:
                self.state.results = list(results)
                self._clear_error(SEARCH_FLOW)
            else:
                self.state.results = []
                self._set_error(SEARCH_FLOW, NO_RESULTS_MESSAGE)
            logger.info("Search resolved: mode=%s query=%r results=%d", mode.value, query, len(results))
        finally:
            self._end_request()

    async def request_random(self) -> None:
        """Show a random recipe in the detail view and leave the favorites view."""
        self.state.showing_favorites = False
        await self._load_detail("random", self.connector.fetch_random, (), RANDOM_FAILURE_PREFIX)

    async def open_detail(self, recipe_id: str) -> None:
        """Load the full recipe for recipe_id into the detail view."""
        await self._load_detail("lookup", self.connector.fetch_by_id, (recipe_id,), DETAIL_FAILURE_PREFIX)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolve_query(self, explicit_query: Optional[str] = None) -> str:
        """
        Effective query for the current mode, stripped.

        Raises:
            EmptyQueryError: If the mode needs a query and none was given
        """
        raw = self.state.query_text if explicit_query is None else explicit_query
        query = (raw or "").strip()
        if self.state.mode.requires_query and not query:
            raise EmptyQueryError(EMPTY_QUERY_MESSAGE)
        return query

    async def _load_detail(
        self,
        operation: str,
        fetch: Callable[..., RecipeDetail],
        args: tuple,
        failure_prefix: str,
    ) -> None:
        self._detail_token += 1
        token = self._detail_token

        self._clear_error(DETAIL_FLOW)
        logger.info("Detail request dispatched: %s%r token=%d", operation, args, token)

        self._begin_request()
        try:
            try:
                detail = await self._dispatch(fetch, *args)
            except Exception as e:
                if token == self._detail_token:
                    logger.warning("Detail request failed: %s%r error=%s", operation, args, e)
                    # The previous detail (if any) stays on screen
                    self._set_error(DETAIL_FLOW, format_failure(failure_prefix, e))
                return

            if token != self._detail_token:
                logger.debug("Discarding stale detail response (token=%d, current=%d)", token, self._detail_token)
                return

            self.state.selected_detail = detail
            self._clear_error(DETAIL_FLOW)
        finally:
            self._end_request()

    def _is_current_search(self, token: int) -> bool:
        if token != self._search_token:
            logger.debug("Discarding stale search response (token=%d, current=%d)", token, self._search_token)
            return False
        return True

    async def _dispatch(self, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking connector call without blocking the event loop."""
        return await asyncio.to_thread(func, *args)

    def _set_error(self, flow: str, message: str) -> None:
        self.state.error_message = message
        self._error_flow = flow

    def _clear_error(self, flow: Optional[str] = None) -> None:
        """Clear error_message; with a flow, only if that flow (or no flow) set it."""
        if flow is None or self._error_flow in (None, flow):
            self.state.error_message = None
            self._error_flow = None

    def _begin_request(self) -> None:
        self._in_flight += 1
        self.state.is_loading = True

    def _end_request(self) -> None:
        self._in_flight -= 1
        self.state.is_loading = self._in_flight > 0
