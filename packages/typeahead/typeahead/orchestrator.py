# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Search orchestration: term and page state, debounced dispatch of lookups, and
the "last request wins" rule for applying their responses.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from typeahead.data_models.config import TypeaheadConfig
from typeahead.data_models.enums import OrchestratorStatus
from typeahead.data_models.search import (
    DEFAULT_RESULTS_PER_PAGE,
    ResultPage,
    SearchRequest,
)
from typeahead.exceptions import LookupFailure

logger = logging.getLogger(__name__)

LookupFn = Callable[[str, int], Awaitable[Any]]
ResultListener = Callable[[ResultPage], None]


class SearchOrchestrator:
    def __init__(
        self,
        lookup: LookupFn,
        *,
        debounce_ms: int = 0,
        debounce_page_changes: bool = False,
        search_empty_term: bool = False,
        results_per_page: int = DEFAULT_RESULTS_PER_PAGE,
        on_state_change: Callable[[], None] | None = None,
    ) -> None:
        """
        Initialize the orchestrator around an external lookup function.

        Args:
            lookup: ``(term, page) -> awaitable`` resolving to a ResultPage or
                a payload that validates as one.
            debounce_ms: Delay applied to term changes before dispatch.
            debounce_page_changes: Apply the debounce delay to page changes too.
            search_empty_term: Dispatch lookups for the empty term.
            results_per_page: Page size of the initial, empty result page.
            on_state_change: Called after every status change or applied result.
        """
        if debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")

        self._lookup = lookup
        self._debounce_seconds = debounce_ms / 1000
        self._debounce_page_changes = debounce_page_changes
        self._search_empty_term = search_empty_term
        self._on_state_change = on_state_change

        self._term = ""
        self._page = 1
        self._sequence = 0
        self._latest_request: SearchRequest | None = None
        self._result_page: ResultPage = ResultPage.empty(results_per_page)
        self._fetching = False
        self._debounce_task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._listeners: list[ResultListener] = []
        self.last_failure: LookupFailure | None = None

    @classmethod
    def from_config(
        cls,
        lookup: LookupFn,
        config: TypeaheadConfig,
        on_state_change: Callable[[], None] | None = None,
    ) -> "SearchOrchestrator":
        return cls(
            lookup,
            debounce_ms=config.debounce_ms,
            debounce_page_changes=config.debounce_page_changes,
            search_empty_term=config.search_empty_term,
            results_per_page=config.results_per_page,
            on_state_change=on_state_change,
        )

    @property
    def term(self) -> str:
        return self._term

    @property
    def page(self) -> int:
        return self._page

    @property
    def latest_request(self) -> SearchRequest | None:
        return self._latest_request

    def current_result_page(self) -> ResultPage:
        return self._result_page

    def status(self) -> OrchestratorStatus:
        if self._debounce_task is not None and not self._debounce_task.done():
            return OrchestratorStatus.DEBOUNCING
        if self._fetching:
            return OrchestratorStatus.FETCHING
        return OrchestratorStatus.IDLE

    def subscribe(self, listener: ResultListener) -> None:
        """Registers a listener called with every applied result page."""
        self._listeners.append(listener)

    def set_term(self, term: str) -> SearchRequest:
        """Replaces the search term, resets to page 1 and starts a new cycle."""
        self._term = term
        self._page = 1
        request = self._issue()
        if not term and not self._search_empty_term:
            self._go_idle()
        else:
            self._schedule(request, debounce=self._debounce_seconds > 0)
        return request

    def set_page(self, page: int) -> SearchRequest | None:
        """Moves to another page of the current term and starts a new cycle."""
        if page < 1:
            logger.debug("Ignoring request for page %d", page)
            return None
        self._page = page
        request = self._issue()
        if not self._term and not self._search_empty_term:
            self._go_idle()
        else:
            self._schedule(
                request,
                debounce=self._debounce_page_changes and self._debounce_seconds > 0,
            )
        return request

    def clear_term(self) -> None:
        """Drops the active term without dispatching a lookup."""
        self._term = ""
        self._page = 1
        self._issue()
        self._go_idle()

    async def settle(self) -> None:
        """Waits until no debounce timer or lookup (stale or not) is pending.

        Raises:
            Exception: The first error raised by a state-change callback while
                a pending task ran. Cancelled timers are not errors.
        """
        while True:
            pending = set(self._in_flight)
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.add(self._debounce_task)
            if not pending:
                return
            results = await asyncio.gather(*pending, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    raise result

    def close(self) -> None:
        """Cancels any pending debounced dispatch.

        Lookups already in flight are not interrupted; their responses are
        discarded when they arrive because the close issues a newer request.
        """
        self._cancel_debounce()
        self._issue()
        self._fetching = False

    def _issue(self) -> SearchRequest:
        self._sequence += 1
        self._latest_request = SearchRequest(
            term=self._term, page=self._page, sequence_id=self._sequence
        )
        self.last_failure = None
        return self._latest_request

    def _is_current(self, request: SearchRequest) -> bool:
        return request.sequence_id == self._sequence

    def _go_idle(self) -> None:
        self._cancel_debounce()
        self._fetching = False
        self._notify()

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None

    def _schedule(self, request: SearchRequest, *, debounce: bool) -> None:
        # Any earlier timer belongs to a superseded request.
        self._cancel_debounce()
        if debounce:
            self._fetching = False
            self._debounce_task = asyncio.get_running_loop().create_task(
                self._dispatch_later(request)
            )
            self._notify()
        else:
            self._dispatch(request)

    async def _dispatch_later(self, request: SearchRequest) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self._debounce_task = None
        if self._is_current(request):
            self._dispatch(request)

    def _dispatch(self, request: SearchRequest) -> None:
        logger.debug(
            "Dispatching lookup #%d for %r (page %d)",
            request.sequence_id,
            request.term,
            request.page,
        )
        self._fetching = True
        try:
            awaitable = self._lookup(request.term, request.page)
        except Exception as e:  # noqa: BLE001
            self._fail(request, e)
            return
        task = asyncio.get_running_loop().create_task(
            self._await_settlement(request, awaitable)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        self._notify()

    async def _await_settlement(
        self, request: SearchRequest, awaitable: Awaitable[Any]
    ) -> None:
        try:
            lookup_future = asyncio.ensure_future(awaitable)
        except TypeError as e:
            self._fail(request, e)
            return
        try:
            # wait() leaves the outcome on the future, so a cancelled lookup
            # is told apart from cancellation of this task.
            await asyncio.wait({lookup_future})
        except asyncio.CancelledError:
            lookup_future.cancel()
            raise

        try:
            if lookup_future.cancelled():
                raise LookupFailure(
                    "Lookup was cancelled", term=request.term, page=request.page
                )
            result_page = ResultPage.model_validate(lookup_future.result())
        except Exception as e:  # noqa: BLE001
            self._fail(request, e)
            return

        if not self._is_current(request):
            logger.debug(
                "Discarding response for superseded request #%d (latest is #%d)",
                request.sequence_id,
                self._sequence,
            )
            return

        self._fetching = False
        self._result_page = result_page
        logger.debug(
            "Applied %d item(s) for %r (page %d of %d result(s))",
            len(result_page.items),
            request.term,
            result_page.page_number,
            result_page.total_results,
        )
        for listener in list(self._listeners):
            try:
                listener(result_page)
            except Exception as e:  # noqa: BLE001
                logger.error("Result listener %r failed: %s", listener, e)
        self._notify()

    def _fail(self, request: SearchRequest, error: Exception) -> None:
        if not self._is_current(request):
            logger.debug(
                "Ignoring failure of superseded request #%d: %s",
                request.sequence_id,
                error,
            )
            return

        if isinstance(error, LookupFailure):
            failure = error
        else:
            failure = LookupFailure(
                str(error) or error.__class__.__name__,
                term=request.term,
                page=request.page,
            )
            failure.__cause__ = error
        logger.warning(
            "Lookup for %r (page %d) failed: %s", request.term, request.page, error
        )
        self._fetching = False
        self.last_failure = failure
        self._notify()

    def _notify(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change()
